"""
Create a user from the command line (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--first-name F] [--last-name L] [--admin]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password --admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.errors import ConflictError
from app.core.logging_config import setup_logging
from app.schemas.auth import RegisterRequest
from app.services.identity import create_user, grant_role

ADMIN_ROLE = "ROLE_ADMIN"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    setup_logging(settings.LOG_LEVEL)
    parser = argparse.ArgumentParser(description="Create an Itemdesk user.")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument("--admin", action="store_true", help=f"Also grant {ADMIN_ROLE}")
    args = parser.parse_args(argv)

    try:
        body = RegisterRequest(
            username=args.username,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        identity = create_user(
            db,
            username=body.username,
            email=body.email,
            raw_password=body.password,
            first_name=body.first_name,
            last_name=body.last_name,
        )
        if args.admin:
            grant_role(db, identity.id, ADMIN_ROLE)
        print(f"Created user '{identity.username}' (id={identity.id}).")
        return 0
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Creating user failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
