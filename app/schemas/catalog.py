"""Pydantic schemas for the beat catalog: items, filters, facet options and responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.auth import SessionUser

CatalogSort = Literal["new", "bpmAsc", "bpmDesc"]

CATALOG_SORT_VALUES: frozenset[str] = frozenset({"new", "bpmAsc", "bpmDesc"})


class BeatItem(BaseModel):
    """Catalog beat as returned to clients (store rows and mock beats alike)."""

    model_config = {"from_attributes": True}

    id: str
    title: str
    bpm: int | None = None
    genre: str | None = None
    type: str | None = None
    instrument: str | None = None
    key: str | None = None
    mood: str | None = None
    preview_url: str | None = None
    created_at: datetime


class CatalogFilters(BaseModel):
    """
    Filter set for the catalog. Unset values (None, empty string, 0 for bpm bounds)
    impose no constraint; all set values must match.
    """

    model_config = {"populate_by_name": True}

    q: str = Field(default="", description="Free-text query over title and attributes")
    genre: str = ""
    type: str = ""
    instrument: str = ""
    key: str = ""
    bpm_min: int | None = Field(default=None, alias="bpmMin")
    bpm_max: int | None = Field(default=None, alias="bpmMax")
    sort: CatalogSort = "new"


class FacetOptions(BaseModel):
    """Distinct values available for each select filter, sorted."""

    genres: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    instruments: list[str] = Field(default_factory=list)
    keys: list[str] = Field(default_factory=list)


class CatalogResponse(BaseModel):
    """Response for GET /beats."""

    beats: list[BeatItem]
    filters: CatalogFilters
    options: FacetOptions
    session_user: SessionUser | None = None
    can_download: bool = False
    mock: bool = Field(default=False, description="True when beats are synthetic (dev only)")


class DownloadResponse(BaseModel):
    """Response for POST /beats/{beat_id}/download."""

    id: str
    beat_id: str
    created_at: datetime
    preview_url: str | None = None
