"""Catalog endpoint and subscription-gated downloads."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_session, get_optional_session
from app.core.config import get_settings
from app.core.database import get_db
from app.models import Beat
from app.schemas.auth import SessionClaims
from app.schemas.catalog import (
    CATALOG_SORT_VALUES,
    BeatItem,
    CatalogFilters,
    CatalogResponse,
    DownloadResponse,
)
from app.services.access import can_download
from app.services.catalog import (
    apply_catalog_filters,
    facet_options,
    query_beats,
    store_facet_options,
)
from app.services.downloads import record_download
from app.services.mock_beats import make_mock_beats
from app.services.session import to_session_user

router = APIRouter()


def _as_int(value: str | None) -> int | None:
    """Lenient int parsing for query strings: non-numeric means unset, decimals truncate."""
    if value is None or not value.strip():
        return None
    try:
        n = float(value)
    except ValueError:
        return None
    if not math.isfinite(n):
        return None
    return math.trunc(n)


@router.get("", response_model=CatalogResponse)
def get_catalog(
    db: Annotated[Session, Depends(get_db)],
    session: Annotated[SessionClaims | None, Depends(get_optional_session)],
    q: str = "",
    genre: str = "",
    type: str = "",
    instrument: str = "",
    key: str = "",
    bpm_min: Annotated[str | None, Query(alias="bpmMin")] = None,
    bpm_max: Annotated[str | None, Query(alias="bpmMax")] = None,
    sort: str = "new",
    mock: str | None = None,
) -> CatalogResponse:
    """
    Return catalog beats matching all given filters, plus the select options and the
    caller's session (if any) with its download entitlement.

    Outside prod, ?mock=N serves N synthetic beats (capped at MOCK_CATALOG_MAX) filtered
    and ordered in memory. Otherwise beats come from the store, newest first by default.
    """
    settings = get_settings()
    filters = CatalogFilters(
        q=q.strip(),
        genre=genre,
        type=type,
        instrument=instrument,
        key=key,
        bpm_min=_as_int(bpm_min),
        bpm_max=_as_int(bpm_max),
        sort=sort if sort in CATALOG_SORT_VALUES else "new",
    )
    session_user = to_session_user(session) if session is not None else None

    mock_count = _as_int(mock)
    if settings.APP_ENV != "prod" and mock_count and mock_count > 0:
        count = min(max(mock_count, 1), settings.MOCK_CATALOG_MAX)
        beats = apply_catalog_filters(make_mock_beats(count), filters)
        return CatalogResponse(
            beats=beats,
            filters=filters,
            options=facet_options(beats),
            session_user=session_user,
            can_download=can_download(session),
            mock=True,
        )

    rows = query_beats(db, filters, limit=settings.CATALOG_PAGE_SIZE)
    return CatalogResponse(
        beats=[BeatItem.model_validate(b) for b in rows],
        filters=filters,
        options=store_facet_options(db),
        session_user=session_user,
        can_download=can_download(session),
    )


@router.post("/{beat_id}/download", response_model=DownloadResponse, status_code=status.HTTP_201_CREATED)
def download_beat(
    beat_id: str,
    session: Annotated[SessionClaims, Depends(get_current_session)],
    db: Annotated[Session, Depends(get_db)],
) -> DownloadResponse:
    """Grant a download to an entitled session and record it. 403 without an active membership."""
    if not can_download(session):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="An active membership is required to download.",
        )
    beat = db.query(Beat).filter(Beat.id == beat_id).first()
    if beat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Beat not found")
    download = record_download(db, session.account_id, beat)
    return DownloadResponse(
        id=download.id,
        beat_id=beat.id,
        created_at=download.created_at,
        preview_url=beat.preview_url,
    )
