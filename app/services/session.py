"""
Session token enrichment: fill role and subscription status into a token once, then trust them.

The single definition of how a session token gets its entitlement claims. Enrichment
is a pure transform of (claims, storage row) so the staleness trade-off is explicit:
once a token carries both role and subscription_status it is never re-checked against
storage, and out-of-band account changes only show up in newly issued tokens.
"""

import logging
from collections.abc import Callable

from app.schemas.auth import (
    AccountIdentity,
    Entitlement,
    Role,
    SessionClaims,
    SessionUser,
    SubscriptionStatus,
)
from app.services.access import can_download

logger = logging.getLogger(__name__)

EntitlementLookup = Callable[[str], Entitlement | None]


class EnrichmentError(Exception):
    """Raised when role/subscription status cannot be read from storage."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def needs_enrichment(claims: SessionClaims) -> bool:
    """True if the token is missing role or subscription status."""
    return claims.role is None or claims.subscription_status is None


def apply_entitlement(
    claims: SessionClaims,
    entitlement: Entitlement | None,
) -> SessionClaims:
    """
    Return claims with role and subscription status taken from the storage row.
    No row means USER / INACTIVE.
    """
    role = entitlement.role if entitlement is not None else Role.USER
    status = (
        entitlement.subscription_status
        if entitlement is not None
        else SubscriptionStatus.INACTIVE
    )
    return claims.model_copy(
        update={
            "id": claims.account_id,
            "role": role,
            "subscription_status": status,
        }
    )


def enrich_session(
    claims: SessionClaims,
    lookup: EntitlementLookup,
    identity: AccountIdentity | None = None,
) -> SessionClaims:
    """
    Run one token refresh cycle.

    identity is passed on first login; its id (and email/name) are copied into the
    claims before the enrichment check. Claims without an account id come back
    unchanged. Claims that already carry role and status come back unchanged
    without calling lookup. Errors from lookup (EnrichmentError) propagate.
    """
    if identity is not None:
        claims = claims.model_copy(
            update={
                "id": identity.id,
                "sub": identity.id,
                "email": identity.email,
                "name": identity.name,
            }
        )

    account_id = claims.account_id
    if not account_id:
        return claims

    if not needs_enrichment(claims):
        return claims

    logger.debug("Enriching session claims from storage", extra={"account_id": account_id})
    entitlement = lookup(account_id)
    return apply_entitlement(claims, entitlement)


def to_session_user(claims: SessionClaims) -> SessionUser:
    """Build the client-facing session view from enriched claims."""
    return SessionUser(
        id=claims.account_id or "",
        email=claims.email,
        name=claims.name,
        role=claims.role or Role.USER,
        subscription_status=claims.subscription_status or SubscriptionStatus.INACTIVE,
        can_download=can_download(claims),
    )
