"""Pydantic schemas for user profiles and the aggregated profile view."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.item import ItemResponse


class ProfileRequest(BaseModel):
    """Mutable profile fields; all optional, each length-bounded."""

    bio: str | None = Field(default=None, max_length=1000)
    avatar_url: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=20)
    date_of_birth: date | None = None
    country: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)


class UserInfo(BaseModel):
    """Public fields of the profile owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    enabled: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileView(BaseModel):
    """
    Profile row joined with its owner and the owner's items.

    items is empty (never a single null-filled entry) when the owner has no items.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    bio: str | None = None
    avatar_url: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    country: str | None = None
    city: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserInfo
    items: list[ItemResponse] = Field(default_factory=list)
