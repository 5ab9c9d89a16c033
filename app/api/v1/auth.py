"""Signup, login and session endpoints plus the session dependencies used by other routes."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.security import (
    NAME_MAX_LEN,
    create_session_token,
    decode_session_token,
    is_valid_email,
    is_valid_password,
)
from app.schemas.auth import (
    AccountIdentity,
    AuthResponse,
    LoginRequest,
    SessionClaims,
    SessionUser,
    SignupRequest,
    SubscriptionUpdateRequest,
    UserListItem,
    UsersListResponse,
)
from app.services.access import LoginRequired, is_admin, sanitize_next
from app.services.accounts import (
    DuplicateEmailError,
    create_account,
    find_account_by_id,
    find_entitlement,
    list_accounts,
    set_subscription,
)
from app.services.credentials import verify_credentials
from app.services.session import EnrichmentError, enrich_session, to_session_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

INVALID_CREDENTIALS = "Invalid email or password."


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_claims(token: str) -> SessionClaims:
    """Verify the token and parse its claims. Raises 401 on any problem."""
    try:
        payload = decode_session_token(token)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        claims = SessionClaims.model_validate(payload)
    except ValidationError:
        raise _unauthorized("Invalid token payload")
    if not claims.account_id:
        raise _unauthorized("Invalid token payload")
    return claims


def _enrich(
    db: Session,
    claims: SessionClaims,
    identity: AccountIdentity | None = None,
) -> SessionClaims:
    """Run enrichment against the account store; storage failure becomes 503."""
    try:
        return enrich_session(
            claims,
            lambda account_id: find_entitlement(db, account_id),
            identity=identity,
        )
    except EnrichmentError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message) from e


def _issue(claims: SessionClaims, next_path: str | None) -> AuthResponse:
    token = create_session_token(claims.to_token_claims())
    return AuthResponse(
        access_token=token,
        token_type="bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        session=to_session_user(claims),
        redirect_to=sanitize_next(next_path),
    )


def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionClaims:
    """Dependency: require a valid Bearer session token and return enriched claims. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    claims = _decode_claims(credentials.credentials)
    return _enrich(db, claims)


def get_optional_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionClaims | None:
    """Dependency: enriched claims when a valid token is sent, else None (guest)."""
    if credentials is None:
        return None
    try:
        claims = _decode_claims(credentials.credentials)
    except HTTPException:
        return None
    return _enrich(db, claims)


def page_path(request: Request) -> str:
    """Frontend page path for a request: the API prefix is dropped and the query kept."""
    path = request.url.path
    prefix = settings.API_V1_PREFIX.rstrip("/")
    if prefix and path.startswith(prefix + "/"):
        path = path[len(prefix):]
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def require_page_session(
    request: Request,
    session: Annotated[SessionClaims | None, Depends(get_optional_session)],
) -> SessionClaims:
    """Dependency for page routes: no session means a redirect to login with ?next=<this path>."""
    if session is None:
        raise LoginRequired(page_path(request))
    return session


def require_admin(
    session: Annotated[SessionClaims, Depends(get_current_session)],
) -> SessionClaims:
    """Dependency: require authenticated session with role ADMIN. Raises 403 for non-admin."""
    if not is_admin(session):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return session


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a session token and the enriched session.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    identity = verify_credentials(db, body.email, body.password)
    if identity is None:
        raise _unauthorized(INVALID_CREDENTIALS)
    claims = _enrich(db, SessionClaims(), identity=identity)
    logger.info("Login succeeded", extra={"account_id": identity.id})
    return _issue(claims, body.next)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an account with email and password and sign it in."""
    email = body.email.strip()
    name = (body.name or "").strip() or None
    if not is_valid_email(email):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid email address.",
        )
    if not is_valid_password(body.password):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Password must be 6-128 characters.",
        )
    if name is not None and len(name) > NAME_MAX_LEN:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid name length.",
        )
    try:
        account = create_account(db, email=email, password=body.password, name=name)
    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered.",
        )
    identity = AccountIdentity.model_validate(account)
    claims = _enrich(db, SessionClaims(), identity=identity)
    logger.info("Signup completed", extra={"account_id": account.id})
    return _issue(claims, body.next)


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    session: Annotated[SessionClaims, Depends(get_current_session)],
    next_path: Annotated[str | None, Query(alias="next")] = None,
) -> AuthResponse:
    """
    Re-issue the session token with a new expiry. Role and subscription status are
    carried over as enriched; sign in again to pick up account changes.
    """
    return _issue(session, next_path)


@router.get("/session", response_model=SessionUser)
def get_session(
    session: Annotated[SessionClaims, Depends(get_current_session)],
) -> SessionUser:
    """Current session: account id, role, subscription status and download entitlement."""
    return to_session_user(session)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all accounts (admin only)."""
    return UsersListResponse(
        users=[UserListItem.model_validate(a) for a in list_accounts(db)]
    )


@router.patch("/users/{account_id}/subscription", response_model=UserListItem)
def update_subscription(
    account_id: str,
    body: SubscriptionUpdateRequest,
    admin: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserListItem:
    """
    Set an account's subscription status (admin only). Tokens already issued to the
    account are not invalidated and keep the status they were enriched with.
    """
    account = find_account_by_id(db, account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    account = set_subscription(
        db,
        account,
        body.subscription_status,
        body.subscription_current_period_end,
    )
    logger.info(
        "Subscription updated by admin",
        extra={"account_id": account.id, "admin_id": admin.account_id},
    )
    return UserListItem.model_validate(account)
