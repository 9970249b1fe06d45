"""Profile aggregator: create-or-update, aggregated read and delete of user profiles."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import UnexpectedError
from app.models import Item, User, UserProfile
from app.models.base import utcnow
from app.schemas.item import ItemResponse
from app.schemas.profile import ProfileRequest, ProfileView, UserInfo

if TYPE_CHECKING:
    from sqlalchemy.engine import Row

logger = logging.getLogger(__name__)

# Columns a caller may overwrite; id, user_id and timestamps are managed here.
MUTABLE_FIELDS = ("bio", "avatar_url", "phone", "date_of_birth", "country", "city")


def aggregate_profile_rows(rows: Iterable[Row[Any] | tuple[Any, Any, Any]]) -> ProfileView | None:
    """
    Fold (profile, user, item) join rows into one nested ProfileView.

    The first row supplies the profile and user parts; every row with a
    non-null item contributes that item once (deduplicated by id, first seen
    wins). No rows means no profile.
    """
    rows = list(rows)
    if not rows:
        return None

    profile, user, _ = rows[0]
    items: list[ItemResponse] = []
    seen: set[int] = set()
    for _, _, item in rows:
        if item is None or item.id is None or item.id in seen:
            continue
        seen.add(item.id)
        items.append(ItemResponse.model_validate(item))

    return ProfileView(
        id=profile.id,
        user_id=profile.user_id,
        bio=profile.bio,
        avatar_url=profile.avatar_url,
        phone=profile.phone,
        date_of_birth=profile.date_of_birth,
        country=profile.country,
        city=profile.city,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
        user=UserInfo.model_validate(user),
        items=items,
    )


def get_profile(db: Session, user_id: int) -> ProfileView | None:
    """
    Return the aggregated profile for user_id, or None if no profile row exists.

    One query: profile JOIN users LEFT OUTER JOIN items.
    """
    rows = (
        db.query(UserProfile, User, Item)
        .join(User, UserProfile.user_id == User.id)
        .outerjoin(Item, Item.user_id == User.id)
        .filter(UserProfile.user_id == user_id)
        .order_by(Item.id)
        .all()
    )
    return aggregate_profile_rows(rows)


def _update_profile_row(db: Session, user_id: int, values: dict[str, Any]) -> bool:
    updated = (
        db.query(UserProfile)
        .filter(UserProfile.user_id == user_id)
        .update({**values, "updated_at": utcnow()}, synchronize_session=False)
    )
    if updated == 0:
        return False
    db.commit()
    return True


def create_or_update_profile(db: Session, user_id: int, fields: ProfileRequest) -> ProfileView:
    """
    Write the caller's profile and return the aggregated view read back afterwards.

    An existing row is overwritten in place. Otherwise a row is inserted; if the
    insert loses a race against a concurrent insert for the same user (unique
    user_id), the write is retried as an update so one row remains.
    """
    values = fields.model_dump(include=set(MUTABLE_FIELDS))

    if _update_profile_row(db, user_id, values):
        logger.info("Profile updated", extra={"user_id": user_id})
    else:
        db.add(UserProfile(user_id=user_id, **values))
        try:
            db.commit()
            logger.info("Profile created", extra={"user_id": user_id})
        except IntegrityError:
            db.rollback()
            if not _update_profile_row(db, user_id, values):
                raise
            logger.info("Profile updated after concurrent create", extra={"user_id": user_id})

    view = get_profile(db, user_id)
    if view is None:
        raise UnexpectedError("Profile could not be read back after saving")
    return view


def delete_profile(db: Session, user_id: int) -> bool:
    """Delete the profile row for user_id if present. Items and the user are untouched."""
    deleted = (
        db.query(UserProfile)
        .filter(UserProfile.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted > 0:
        logger.info("Profile deleted", extra={"user_id": user_id})
    return deleted > 0
