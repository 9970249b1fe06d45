"""Public and protected endpoints for checking client auth wiring."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import get_current_user
from app.schemas.auth import Identity, MessageResponse, ProtectedResponse

router = APIRouter()


@router.get("/public", response_model=MessageResponse)
def public_endpoint() -> MessageResponse:
    return MessageResponse(message="This is a public endpoint - no authentication required")


@router.get("/protected", response_model=ProtectedResponse)
def protected_endpoint(
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> ProtectedResponse:
    return ProtectedResponse(
        message="This is a protected endpoint - authentication required",
        username=current_user.username,
        email=current_user.email,
        roles=current_user.roles,
    )
