"""Request/response schemas for auth endpoints and the session token model."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Account role. Closed set; anything else in a token is rejected."""

    USER = "USER"
    ADMIN = "ADMIN"


class SubscriptionStatus(str, Enum):
    """Membership state. Only ACTIVE grants download entitlement."""

    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELED = "CANCELED"


class LoginRequest(BaseModel):
    """
    Credentials for login. Shape is checked by the credential verifier, not here,
    so malformed input gets the same 401 as a wrong password.
    """

    email: str = Field(default="", description="Account email")
    password: str = Field(default="", description="Password")
    next: str | None = Field(default=None, description="Path to continue to after login")


class SignupRequest(BaseModel):
    """New account details."""

    name: str | None = Field(default=None, max_length=255, description="Display name")
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password (6-128 characters)")
    next: str | None = Field(default=None, description="Path to continue to after signup")


class AccountIdentity(BaseModel):
    """Minimal identity returned by a successful credential check."""

    model_config = {"from_attributes": True}

    id: str
    email: str
    name: str | None = None


class Entitlement(BaseModel):
    """Role and subscription status as read from the account store."""

    model_config = {"from_attributes": True}

    role: Role = Role.USER
    subscription_status: SubscriptionStatus = SubscriptionStatus.INACTIVE


class SessionClaims(BaseModel):
    """
    Contents of a session token. Immutable: enrichment returns a new instance.

    role and subscription_status are None until the token has been enriched.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    sub: str | None = None
    id: str | None = None
    email: str | None = None
    name: str | None = None
    role: Role | None = None
    subscription_status: SubscriptionStatus | None = None

    @property
    def account_id(self) -> str | None:
        """Account id from id, falling back to the standard sub claim."""
        return self.id or self.sub

    def to_token_claims(self) -> dict[str, str]:
        """Claims to sign into a token (unset values omitted)."""
        return self.model_dump(mode="json", exclude_none=True)


class SessionUser(BaseModel):
    """Enriched session as seen by route handlers and returned to clients."""

    id: str
    email: str | None = None
    name: str | None = None
    role: Role
    subscription_status: SubscriptionStatus
    can_download: bool


class AuthResponse(BaseModel):
    """Token and session returned after login, signup or refresh."""

    access_token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    session: SessionUser
    redirect_to: str = Field(..., description="Sanitized path to continue to")


class UserListItem(BaseModel):
    """Account entry for admin list (no password hash)."""

    model_config = {"from_attributes": True}

    id: str
    email: str
    name: str | None = None
    role: Role
    subscription_status: SubscriptionStatus
    subscription_current_period_end: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserListItem]


class SubscriptionUpdateRequest(BaseModel):
    """Admin change of an account's subscription state."""

    subscription_status: SubscriptionStatus
    subscription_current_period_end: datetime | None = None
