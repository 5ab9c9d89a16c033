"""Password hashing and session token (JWT) creation/verification."""

import re
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Input validation for credentials. Passwords shorter than the minimum are never compared.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
EMAIL_MAX_LEN = 255
NAME_MAX_LEN = 255

# Basic email shape: something@something.tld, no whitespace.
_EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str | None) -> bool:
    """True if email has a basic local@domain.tld shape and fits the column."""
    if not email or len(email) > EMAIL_MAX_LEN:
        return False
    return _EMAIL_SHAPE.match(email) is not None


def is_valid_password(password: str | None) -> bool:
    """True if password length is within PASSWORD_MIN_LEN..PASSWORD_MAX_LEN."""
    if password is None:
        return False
    return PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def _dummy_hash_for_rounds(rounds: int) -> str:
    return bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def dummy_password_hash() -> str:
    """Hash compared against when no account matches, so both paths cost one bcrypt check.
    Uses the current BCRYPT_ROUNDS, the same cost as stored hashes."""
    return _dummy_hash_for_rounds(BCRYPT_ROUNDS)


def create_session_token(claims: dict[str, Any]) -> str:
    """
    Sign a session token from claims (sub, id, email, name, role, subscription_status).
    iat and exp are always set here; any values passed in are replaced.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {k: v for k, v in claims.items() if v is not None}
    payload["iat"] = now
    payload["exp"] = expire
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token; return its payload.
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
    )
