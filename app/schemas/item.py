"""Pydantic schemas for items."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_MAX_LENGTH = 255


class ItemRequest(BaseModel):
    """Body for creating or replacing an item."""

    name: str = Field(..., max_length=NAME_MAX_LENGTH, description="Item name (required)")
    description: str | None = Field(default=None, description="Free-form description")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class ItemResponse(BaseModel):
    """Stored item as returned to its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
