"""Request/response schemas for auth endpoints and the authenticated identity."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    first_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < USERNAME_MIN_LEN:
            raise ValueError(f"username must be at least {USERNAME_MIN_LEN} characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if len(v) > EMAIL_MAX_LEN:
                raise ValueError(f"email must be at most {EMAIL_MAX_LEN} characters")
        return v


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class AuthResponse(BaseModel):
    """JWT access token plus the account it was issued for."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    username: str
    email: str


class Identity(BaseModel):
    """Authenticated user as seen by handlers and stores."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    enabled: bool = True
    roles: list[str] = Field(default_factory=list)
    password_hash: str = Field(default="", exclude=True, repr=False)


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ProtectedResponse(BaseModel):
    """Echo of the caller's identity for GET /test/protected."""

    message: str
    username: str
    email: str
    roles: list[str]
