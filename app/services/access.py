"""
Access policy: download entitlement, admin check and login redirect targets.

All functions here are pure functions of the enriched session (or of a path).
"""

from typing import Protocol
from urllib.parse import urlencode

from app.core.config import settings
from app.schemas.auth import Role, SubscriptionStatus

# Every Role must appear here; tests check the mapping is exhaustive.
_ADMIN_BY_ROLE: dict[Role, bool] = {
    Role.USER: False,
    Role.ADMIN: True,
}


class SessionLike(Protocol):
    role: Role | None
    subscription_status: SubscriptionStatus | None


class LoginRequired(Exception):
    """Raised by page guards when there is no session; handled as a redirect to login."""

    def __init__(self, next_path: str) -> None:
        self.next_path = next_path
        super().__init__(next_path)


def can_download(session: SessionLike | None) -> bool:
    """Entitlement: true iff the session's subscription status is ACTIVE."""
    if session is None:
        return False
    return session.subscription_status == SubscriptionStatus.ACTIVE


def is_admin(session: SessionLike | None) -> bool:
    """True iff the session's role is ADMIN. Missing role counts as USER."""
    if session is None:
        return False
    return _ADMIN_BY_ROLE[session.role or Role.USER]


def sanitize_next(value: str | None, default: str | None = None) -> str:
    """
    Return value if it is a local absolute path, else the default landing path.

    Rejects empty values, absolute URLs (https://...), protocol-relative paths
    (//host, /\\host) and anything with control characters, so a login link
    can never redirect off-site.
    """
    fallback = default or settings.DEFAULT_LANDING_PATH
    if not value or not isinstance(value, str):
        return fallback
    if not value.startswith("/"):
        return fallback
    if value[1:2] in ("/", "\\"):
        return fallback
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
        return fallback
    return value


def login_redirect_url(next_path: str | None) -> str:
    """Login page URL carrying the sanitized path to return to, e.g. /login?next=/billing."""
    query = urlencode({"next": sanitize_next(next_path)}, safe="/")
    return f"{settings.LOGIN_PATH}?{query}"
