"""Item endpoints. Every call is scoped to the authenticated caller."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.schemas.auth import Identity, MessageResponse
from app.schemas.item import ItemRequest, ItemResponse
from app.services import items as item_store

router = APIRouter()

ITEM_NOT_FOUND = "Item not found"


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    body: ItemRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> ItemResponse:
    item = item_store.create_item(db, current_user.id, body.name, body.description)
    return ItemResponse.model_validate(item)


@router.get("", response_model=list[ItemResponse])
def list_items(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> list[ItemResponse]:
    """Return all items owned by the caller."""
    return [ItemResponse.model_validate(i) for i in item_store.list_items(db, current_user.id)]


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> ItemResponse:
    """Return one item. 404 when it does not exist or belongs to another user."""
    item = item_store.get_item(db, item_id, current_user.id)
    if item is None:
        raise NotFoundError(ITEM_NOT_FOUND)
    return ItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    body: ItemRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> ItemResponse:
    """Replace name and description of an owned item."""
    item = item_store.update_item(db, item_id, current_user.id, body.name, body.description)
    if item is None:
        raise NotFoundError(ITEM_NOT_FOUND)
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> MessageResponse:
    if not item_store.delete_item(db, item_id, current_user.id):
        raise NotFoundError(ITEM_NOT_FOUND)
    return MessageResponse(message="Item deleted successfully")
