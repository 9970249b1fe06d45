"""Item store: CRUD on items, always scoped by the owning user's id."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models import Item
from app.models.base import utcnow

logger = logging.getLogger(__name__)


def _require_name(name: str | None) -> str:
    if not name or not name.strip():
        raise ValidationError("Name is required")
    return name.strip()


def create_item(db: Session, user_id: int, name: str, description: str | None = None) -> Item:
    """Insert an item owned by user_id and return it with generated id and timestamps."""
    item = Item(name=_require_name(name), description=description, user_id=user_id)
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Item created", extra={"item_id": item.id, "user_id": user_id})
    return item


def list_items(db: Session, user_id: int) -> list[Item]:
    """All items owned by user_id."""
    return db.query(Item).filter(Item.user_id == user_id).order_by(Item.id).all()


def get_item(db: Session, item_id: int, user_id: int) -> Item | None:
    """
    Return the item if it exists and belongs to user_id, else None.

    A missing id and another user's id look the same to the caller.
    """
    return (
        db.query(Item)
        .filter(Item.id == item_id, Item.user_id == user_id)
        .first()
    )


def update_item(
    db: Session,
    item_id: int,
    user_id: int,
    name: str,
    description: str | None = None,
) -> Item | None:
    """Overwrite name and description of an owned item; None under the same rule as get_item."""
    updated = (
        db.query(Item)
        .filter(Item.id == item_id, Item.user_id == user_id)
        .update(
            {
                Item.name: _require_name(name),
                Item.description: description,
                Item.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        return None
    db.commit()
    logger.info("Item updated", extra={"item_id": item_id, "user_id": user_id})
    return get_item(db, item_id, user_id)


def delete_item(db: Session, item_id: int, user_id: int) -> bool:
    """Delete an owned item. True iff a row matching both id and owner was removed."""
    deleted = (
        db.query(Item)
        .filter(Item.id == item_id, Item.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted > 0:
        logger.info("Item deleted", extra={"item_id": item_id, "user_id": user_id})
    return deleted > 0
