"""
Create an admin account (the only way to create a super-admin). Run from project root:
  python -m admin_service.scripts.create_admin EMAIL PASSWORD FIRST_NAME LAST_NAME [--role super-admin]
Example:
  python -m admin_service.scripts.create_admin root@example.com your-secure-password Root Admin --role super-admin
"""
import argparse
import logging
import sys

from admin_service.core.config import get_settings
from admin_service.core.database import SessionLocal, session_scope
from admin_service.core.errors import DuplicateAccountError
from admin_service.core.logging import configure_logging
from admin_service.core.roles import BASE_ROLE, ROLES
from admin_service.core.security import CredentialHasher
from admin_service.services.accounts import AdminRepository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an admin account.")
    parser.add_argument("email", help="Email (unique, 1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument("--role", default=BASE_ROLE, choices=ROLES)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().LOG_LEVEL)

    email = args.email.strip().lower()
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    with session_scope(SessionLocal) as db:
        repository = AdminRepository(db)
        if repository.get_by_email(email) is not None:
            print(f"Admin '{email}' already exists.", file=sys.stderr)
            return 1
        try:
            admin = repository.create(
                first_name=args.first_name,
                last_name=args.last_name,
                email=email,
                password_hash=CredentialHasher().hash(args.password),
                role=args.role,
            )
        except DuplicateAccountError:
            print(f"Admin '{email}' already exists.", file=sys.stderr)
            return 1
        logger.info("Created admin", extra={"admin_id": admin.id, "role": admin.role})
        print(f"Created admin '{email}' with role '{args.role}'.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
