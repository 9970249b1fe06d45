"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.item import Item
from app.models.profile import UserProfile
from app.models.user import Role, User, UserRole

__all__ = ["Base", "Item", "Role", "User", "UserProfile", "UserRole"]
