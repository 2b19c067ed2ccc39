"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--name NAME] [--role admin]
Or seed the admin from ADMIN_USERNAME / ADMIN_EMAIL / ADMIN_PASSWORD (no-op if it exists):
  python -m app.scripts.create_user --admin-from-env
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import ConflictError
from app.core.logging_config import configure_logging
from app.schemas.user import UserCreate
from app.services.users import UserStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a blog user (admins cannot self-register).")
    parser.add_argument("username", nargs="?", help="Username (3-50 chars)")
    parser.add_argument("email", nargs="?", help="Email address")
    parser.add_argument("password", nargs="?", help="Password (6-128 chars)")
    parser.add_argument("--name", default=None, help="Display name (defaults to username)")
    parser.add_argument("--role", default="user", choices=["user", "admin"])
    parser.add_argument(
        "--admin-from-env",
        action="store_true",
        help="Create the admin described by ADMIN_* settings if it does not exist",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.admin_from_env:
        username = settings.ADMIN_USERNAME
        email = settings.ADMIN_EMAIL
        password = settings.ADMIN_PASSWORD.get_secret_value()
        name, role = "Administrator", "admin"
    else:
        if not (args.username and args.email and args.password):
            parser.error("username, email and password are required without --admin-from-env")
        username, email, password = args.username.strip(), args.email.strip(), args.password
        name, role = args.name or username, args.role

    try:
        data = UserCreate(name=name, email=email, username=username, password=password, role=role)
    except ValidationError as e:
        print(f"Invalid user data: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        users = UserStore(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)
        if args.admin_from_env and users.find_by_username(username) is not None:
            logger.info("Admin user '%s' already exists; skipping.", username)
            return 0
        try:
            users.create(data)
        except ConflictError as e:
            print(f"{e.message}: '{username}' / '{email}'.", file=sys.stderr)
            return 1
        print(f"Created user '{username}' with role '{role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
