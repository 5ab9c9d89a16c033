"""Pydantic schemas for the account dashboard and billing views."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.auth import SubscriptionStatus

STATUS_LABELS: dict[SubscriptionStatus, str] = {
    SubscriptionStatus.ACTIVE: "Active",
    SubscriptionStatus.PAST_DUE: "Payment pending",
    SubscriptionStatus.CANCELED: "Canceled",
    SubscriptionStatus.INACTIVE: "Inactive",
}


class ProfileInfo(BaseModel):
    name: str | None = None
    email: str
    created_at: datetime


class MembershipInfo(BaseModel):
    status: SubscriptionStatus
    status_label: str
    current_period_end: datetime | None = Field(
        default=None,
        description="End of the current paid period (next renewal), if any",
    )


class DownloadBeatSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    title: str
    bpm: int | None = None
    genre: str | None = None
    mood: str | None = None


class DownloadItem(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    created_at: datetime
    beat: DownloadBeatSummary


class DownloadsSummary(BaseModel):
    total: int
    recent: list[DownloadItem]


class DashboardResponse(BaseModel):
    """Response for GET /dashboard."""

    user: ProfileInfo
    membership: MembershipInfo
    downloads: DownloadsSummary


class BillingResponse(BaseModel):
    """Response for GET /billing."""

    name: str | None = None
    email: str
    membership: MembershipInfo
    is_active: bool
