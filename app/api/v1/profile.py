"""Profile endpoints: aggregated read, create-or-update, delete for the caller's profile."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.schemas.auth import Identity, MessageResponse
from app.schemas.profile import ProfileRequest, ProfileView
from app.services import profiles as profile_store

router = APIRouter()


@router.get("", response_model=ProfileView)
def get_profile(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> ProfileView:
    """
    Return the caller's profile with their user details and all their items.
    404 if the caller has not created a profile yet.
    """
    view = profile_store.get_profile(db, current_user.id)
    if view is None:
        raise NotFoundError("Profile not found")
    return view


@router.post("", response_model=ProfileView)
def create_or_update_profile(
    body: ProfileRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> ProfileView:
    """Create the caller's profile, or overwrite it if one exists. Returns the aggregated view."""
    return profile_store.create_or_update_profile(db, current_user.id, body)


@router.delete("", response_model=MessageResponse)
def delete_profile(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> MessageResponse:
    profile_store.delete_profile(db, current_user.id)
    return MessageResponse(message="Profile deleted successfully")
