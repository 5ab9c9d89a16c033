"""Account pages: dashboard (profile, membership, download history) and billing."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.v1.auth import page_path, require_page_session
from app.core.database import get_db
from app.models import Account
from app.schemas.account import (
    STATUS_LABELS,
    BillingResponse,
    DashboardResponse,
    DownloadItem,
    DownloadsSummary,
    MembershipInfo,
    ProfileInfo,
)
from app.schemas.auth import SessionClaims, SubscriptionStatus
from app.services.access import LoginRequired
from app.services.accounts import find_account_by_id
from app.services.downloads import count_downloads, recent_downloads

router = APIRouter()


def _load_account(db: Session, session: SessionClaims, next_path: str) -> Account:
    """Account behind the session; a session for a missing account is sent back to login."""
    account = find_account_by_id(db, session.account_id)
    if account is None:
        raise LoginRequired(next_path)
    return account


def _membership(account: Account, session: SessionClaims) -> MembershipInfo:
    """Membership as stored now, falling back to the session's status."""
    status = SubscriptionStatus(
        account.subscription_status
        or session.subscription_status
        or SubscriptionStatus.INACTIVE
    )
    return MembershipInfo(
        status=status,
        status_label=STATUS_LABELS[status],
        current_period_end=account.subscription_current_period_end,
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request: Request,
    session: Annotated[SessionClaims, Depends(require_page_session)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardResponse:
    """Profile, membership and the ten most recent downloads. Redirects to login without a session."""
    account = _load_account(db, session, page_path(request))
    recent = recent_downloads(db, account.id)
    return DashboardResponse(
        user=ProfileInfo(
            name=account.name,
            email=account.email,
            created_at=account.created_at,
        ),
        membership=_membership(account, session),
        downloads=DownloadsSummary(
            total=count_downloads(db, account.id),
            recent=[DownloadItem.model_validate(d) for d in recent],
        ),
    )


@router.get("/billing", response_model=BillingResponse)
def get_billing(
    request: Request,
    session: Annotated[SessionClaims, Depends(require_page_session)],
    db: Annotated[Session, Depends(get_db)],
) -> BillingResponse:
    """Membership status and renewal date. Redirects to login without a session."""
    account = _load_account(db, session, page_path(request))
    membership = _membership(account, session)
    return BillingResponse(
        name=account.name,
        email=account.email,
        membership=membership,
        is_active=membership.status == SubscriptionStatus.ACTIVE,
    )
