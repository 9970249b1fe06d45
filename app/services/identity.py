"""Identity store: user creation, role assignment, credential lookup."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationError, ConflictError, NotFoundError
from app.core.security import hash_password, verify_password
from app.models import Role, User, UserRole
from app.schemas.auth import Identity

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def exists_by_username(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def exists_by_email(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def _role_names(db: Session, user_id: int) -> list[str]:
    """
    Role names assigned to a user.

    A user with no role rows is treated as holding the default role; this is a
    fallback rule, not an error.
    """
    rows = (
        db.query(Role.name)
        .join(UserRole, UserRole.role_id == Role.id)
        .filter(UserRole.user_id == user_id)
        .order_by(Role.name)
        .all()
    )
    names = [r[0] for r in rows]
    return names or [settings.DEFAULT_ROLE]


def _to_identity(user: User, roles: list[str]) -> Identity:
    return Identity(
        id=user.id,
        username=user.username,
        email=user.email,
        enabled=bool(user.enabled),
        roles=roles,
        password_hash=user.password_hash,
    )


def _conflict_message(db: Session, username: str, email: str) -> str:
    if exists_by_username(db, username):
        return "Username is already taken"
    if exists_by_email(db, email):
        return "Email is already in use"
    return "Username or email is already registered"


def create_user(
    db: Session,
    username: str,
    email: str,
    raw_password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> Identity:
    """
    Insert a new enabled user and assign the default role.

    Duplicates are detected by the unique constraints on username and email:
    the insert is attempted once and an IntegrityError becomes ConflictError.
    """
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(raw_password),
        first_name=first_name,
        last_name=last_name,
        enabled=True,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(_conflict_message(db, username, email)) from e

    role = db.query(Role).filter(Role.name == settings.DEFAULT_ROLE).first()
    if role is not None:
        db.add(UserRole(user_id=user.id, role_id=role.id))
    db.commit()
    db.refresh(user)

    logger.info("User registered", extra={"user_id": user.id, "username": user.username})
    return _to_identity(user, [settings.DEFAULT_ROLE])


def load_by_username(db: Session, username: str) -> Identity:
    """Return the identity for username with its role names. Raises NotFoundError if absent."""
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise NotFoundError(f"User not found: {username}")
    return _to_identity(user, _role_names(db, user.id))


def authenticate(db: Session, username: str, password: str) -> Identity:
    """
    Verify username/password and return the identity.

    Unknown user, wrong password and disabled account all raise the same
    AuthenticationError so callers cannot tell them apart.
    """
    try:
        identity = load_by_username(db, username)
    except NotFoundError:
        logger.info("Login failed", extra={"reason": "unknown_user"})
        raise AuthenticationError(INVALID_CREDENTIALS) from None
    if not verify_password(password, identity.password_hash):
        logger.info("Login failed", extra={"reason": "bad_password", "user_id": identity.id})
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not identity.enabled:
        logger.info("Login failed", extra={"reason": "disabled", "user_id": identity.id})
        raise AuthenticationError(INVALID_CREDENTIALS)
    return identity


def grant_role(db: Session, user_id: int, role_name: str) -> None:
    """Attach role_name to a user, creating the role row if it does not exist yet."""
    role = db.query(Role).filter(Role.name == role_name).first()
    if role is None:
        role = Role(name=role_name)
        db.add(role)
        db.flush()
    exists = (
        db.query(UserRole)
        .filter(UserRole.user_id == user_id, UserRole.role_id == role.id)
        .first()
    )
    if exists is None:
        db.add(UserRole(user_id=user_id, role_id=role.id))
    db.commit()

