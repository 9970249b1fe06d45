"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    Identity,
    LoginRequest,
    MessageResponse,
    ProtectedResponse,
    RegisterRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.item import ItemRequest, ItemResponse
from app.schemas.profile import ProfileRequest, ProfileView, UserInfo

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "Identity",
    "ItemRequest",
    "ItemResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileRequest",
    "ProfileView",
    "ProtectedResponse",
    "RegisterRequest",
    "UserInfo",
]
