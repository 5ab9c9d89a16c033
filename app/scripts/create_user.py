"""
Create an account (e.g. first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [role] [--name NAME] [--status STATUS]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password ADMIN --status ACTIVE
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.security import is_valid_email, is_valid_password
from app.schemas.auth import Role, SubscriptionStatus
from app.services.accounts import DuplicateEmailError, create_account

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a Beatstore account.")
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--name", default=None, help="Display name")
    parser.add_argument(
        "--status",
        default=SubscriptionStatus.INACTIVE.value,
        choices=[s.value for s in SubscriptionStatus],
        help="Initial subscription status",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    email = args.email.strip()
    if not is_valid_email(email):
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not is_valid_password(args.password):
        print("Password must be 6-128 characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        account = create_account(
            db,
            email=email,
            password=args.password,
            name=(args.name or "").strip() or None,
            role=Role(args.role),
            subscription_status=SubscriptionStatus(args.status),
        )
    except DuplicateEmailError:
        print(f"Account '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created account %s with role %s", account.id, args.role)
    print(f"Created account '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
