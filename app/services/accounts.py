"""Account store: lookups and writes on the users table."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models import Account
from app.schemas.auth import Entitlement, Role, SubscriptionStatus
from app.services.session import EnrichmentError

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when creating an account for an email that is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already registered")


def find_account_by_email(db: Session, email: str) -> Account | None:
    """Exact (case-sensitive) email match as stored."""
    return db.query(Account).filter(Account.email == email).first()


def find_account_by_id(db: Session, account_id: str) -> Account | None:
    return db.query(Account).filter(Account.id == account_id).first()


def find_entitlement(db: Session, account_id: str) -> Entitlement | None:
    """
    Role and subscription status for an account, or None when there is no row.
    Raises EnrichmentError if the store cannot be read or holds a role or status
    outside the known sets.
    """
    try:
        row = (
            db.query(Account.role, Account.subscription_status)
            .filter(Account.id == account_id)
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(
            "Entitlement lookup failed",
            extra={"account_id": account_id, "error_type": type(e).__name__},
        )
        raise EnrichmentError("Account store unavailable while loading session.") from e
    if row is None:
        return None
    try:
        return Entitlement(
            role=Role(row.role),
            subscription_status=SubscriptionStatus(row.subscription_status),
        )
    except ValueError as e:
        logger.error(
            "Stored entitlement has an unknown value",
            extra={"account_id": account_id, "error_type": type(e).__name__},
        )
        raise EnrichmentError("Account store returned an unknown role or subscription status.") from e


def create_account(
    db: Session,
    email: str,
    password: str | None,
    name: str | None = None,
    role: Role = Role.USER,
    subscription_status: SubscriptionStatus = SubscriptionStatus.INACTIVE,
) -> Account:
    """
    Insert a new account. password=None creates an account that cannot sign in
    with credentials. Raises DuplicateEmailError if the email is taken.
    """
    if find_account_by_email(db, email) is not None:
        raise DuplicateEmailError(email)
    account = Account(
        email=email,
        name=name,
        password_hash=hash_password(password) if password is not None else None,
        role=role.value,
        subscription_status=subscription_status.value,
    )
    db.add(account)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmailError(email) from e
    db.refresh(account)
    logger.info("Account created", extra={"account_id": account.id, "role": account.role})
    return account


def set_subscription(
    db: Session,
    account: Account,
    status: SubscriptionStatus,
    current_period_end: datetime | None,
) -> Account:
    """Update subscription state. Tokens already issued keep their old status until re-login."""
    previous = account.subscription_status
    account.subscription_status = status.value
    account.subscription_current_period_end = current_period_end
    db.commit()
    db.refresh(account)
    logger.info(
        "Subscription status changed",
        extra={"account_id": account.id, "from": previous, "to": status.value},
    )
    return account


def list_accounts(db: Session) -> list[Account]:
    return db.query(Account).order_by(Account.created_at, Account.email).all()
