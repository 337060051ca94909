"""
Create a user from the command line. Run from project root:
  python -m app.scripts.create_user NAME PASSWORD [--email E] [--permission MASK] [--admin]
Example (first admin without going through the HTTP bootstrap):
  python -m app.scripts.create_user admin your-secure-password --admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError as SchemaValidationError

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.errors import AppError
from app.schemas.user import SignUpRequest
from app.services import accounts, admins, app_settings, permissions

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a catalog user.")
    parser.add_argument("name", help="Name (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--email", default=None, help="Optional email address")
    parser.add_argument(
        "--permission",
        type=int,
        default=None,
        help="Permission bitmask (READ=1, WRITE=2, APPROVE=4, MODERATE=8); defaults to the sign-up default",
    )
    parser.add_argument("--admin", action="store_true", help="Create the user as an admin")
    args = parser.parse_args(argv)

    try:
        request = SignUpRequest(name=args.name, email=args.email, password=args.password)
    except SchemaValidationError as e:
        print(f"Invalid input: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    try:
        level = None if args.permission is None else permissions.from_mask(args.permission)
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1

    settings = get_settings()
    with session_scope() as db:
        try:
            app_settings.load_into_config(db, settings)
            if args.admin:
                user, _ = admins.create_admin(db, settings, request)
                if level is not None:
                    permissions.set_permission(db, user.id, level)
            else:
                user, _ = accounts.sign_up(db, settings, request, level=level)
        except AppError as e:
            print(e.message, file=sys.stderr)
            return 1
        role = "admin" if args.admin else "user"
        print(f"Created {role} '{user.name}' ({user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
