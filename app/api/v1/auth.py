"""Registration, login, token validation and the get_current_user dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthenticationError, NotFoundError
from app.core.security import create_access_token, username_from_token
from app.schemas.auth import (
    AuthResponse,
    Identity,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from app.services import identity as identity_store

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    """Dependency: require a valid Bearer JWT and return the caller's identity. Raises 401 otherwise."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    username = username_from_token(credentials.credentials)
    if username is None:
        raise AuthenticationError("Invalid or expired token")
    try:
        identity = identity_store.load_by_username(db, username)
    except NotFoundError:
        raise AuthenticationError("User not found") from None
    if not identity.enabled:
        raise AuthenticationError("User is disabled")
    return identity


@router.post("/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Create an account and return a JWT for it.

    Responds 400 if the username or email is already registered.
    """
    identity = identity_store.create_user(
        db,
        username=body.username,
        email=body.email,
        raw_password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    token = create_access_token(identity.username, identity.roles)
    return AuthResponse(
        access_token=token,
        token_type="bearer",
        username=identity.username,
        email=identity.email,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    identity = identity_store.authenticate(db, body.username, body.password)
    token = create_access_token(identity.username, identity.roles)
    return AuthResponse(
        access_token=token,
        token_type="bearer",
        username=identity.username,
        email=identity.email,
    )


@router.get("/validate", response_model=MessageResponse)
def validate_token(
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> MessageResponse:
    """Confirm the bearer token is valid and name the user it belongs to."""
    return MessageResponse(message=f"Token is valid for user: {current_user.username}")
