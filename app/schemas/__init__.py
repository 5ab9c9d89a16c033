"""Pydantic request/response schemas."""

from app.schemas.account import (
    BillingResponse,
    DashboardResponse,
    DownloadItem,
    MembershipInfo,
    ProfileInfo,
)
from app.schemas.auth import (
    AccountIdentity,
    AuthResponse,
    Entitlement,
    LoginRequest,
    Role,
    SessionClaims,
    SessionUser,
    SignupRequest,
    SubscriptionStatus,
)
from app.schemas.catalog import (
    BeatItem,
    CatalogFilters,
    CatalogResponse,
    DownloadResponse,
    FacetOptions,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AccountIdentity",
    "AuthResponse",
    "BeatItem",
    "BillingResponse",
    "CatalogFilters",
    "CatalogResponse",
    "DashboardResponse",
    "DownloadItem",
    "DownloadResponse",
    "Entitlement",
    "FacetOptions",
    "HealthResponse",
    "LoginRequest",
    "MembershipInfo",
    "ProfileInfo",
    "Role",
    "SessionClaims",
    "SessionUser",
    "SignupRequest",
    "SubscriptionStatus",
]
