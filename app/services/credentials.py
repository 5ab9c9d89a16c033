"""Credential verification: email + password against the stored bcrypt hash."""

import logging

from sqlalchemy.orm import Session

from app.core.security import (
    dummy_password_hash,
    is_valid_email,
    is_valid_password,
    verify_password,
)
from app.schemas.auth import AccountIdentity
from app.services.accounts import find_account_by_email

logger = logging.getLogger(__name__)


def verify_credentials(db: Session, email: str, password: str) -> AccountIdentity | None:
    """
    Return the account identity if email and password match, else None.

    Malformed input (bad email shape, password under the minimum length) fails
    without touching storage. Unknown email and account-without-password fail the
    same way as a wrong password, and still pay for one bcrypt comparison, so the
    result does not reveal which accounts exist.
    """
    if not is_valid_email(email) or not is_valid_password(password):
        logger.info("Login rejected: malformed credentials")
        return None

    account = find_account_by_email(db, email)
    if account is None or not account.password_hash:
        verify_password(password, dummy_password_hash())
        logger.info("Login rejected: invalid credentials")
        return None

    if not verify_password(password, account.password_hash):
        logger.info("Login rejected: invalid credentials")
        return None

    return AccountIdentity(id=account.id, email=account.email, name=account.name)
