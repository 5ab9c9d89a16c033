"""
Catalog filtering and ordering.

filter_beats / sort_beats work on in-memory lists (mock mode); query_beats applies the
same filter set in SQL against the beats table.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from sqlalchemy import String, func
from sqlalchemy.orm import Session

from app.models import Beat
from app.schemas.catalog import CatalogFilters, FacetOptions


class BeatLike(Protocol):
    title: str
    bpm: int | None
    genre: str | None
    type: str | None
    instrument: str | None
    key: str | None
    mood: str | None


B = TypeVar("B", bound=BeatLike)

_EXACT_FIELDS = ("genre", "type", "instrument", "key")


def _bpm(beat: BeatLike) -> int:
    """bpm with missing treated as 0 for comparisons."""
    return beat.bpm or 0


def _search_text(beat: BeatLike) -> str:
    parts = (beat.title, beat.genre, beat.type, beat.instrument, beat.mood, beat.key)
    return " ".join(p or "" for p in parts).lower()


def matches_filters(beat: BeatLike, filters: CatalogFilters) -> bool:
    """True if the beat satisfies every set filter."""
    q = filters.q.strip().lower()
    if q and q not in _search_text(beat):
        return False
    for field in _EXACT_FIELDS:
        wanted = getattr(filters, field)
        if wanted and getattr(beat, field) != wanted:
            return False
    if filters.bpm_min and _bpm(beat) < filters.bpm_min:
        return False
    if filters.bpm_max and _bpm(beat) > filters.bpm_max:
        return False
    return True


def filter_beats(beats: Iterable[B], filters: CatalogFilters) -> list[B]:
    """Subsequence of beats matching all filters, input order preserved."""
    return [b for b in beats if matches_filters(b, filters)]


def sort_beats(beats: Sequence[B], sort: str) -> list[B]:
    """
    Order beats. "new" keeps input order (callers pass newest first); bpmAsc and
    bpmDesc are stable sorts on bpm. Unknown keys behave like "new".
    """
    if sort == "bpmAsc":
        return sorted(beats, key=_bpm)
    if sort == "bpmDesc":
        return sorted(beats, key=_bpm, reverse=True)
    return list(beats)


def apply_catalog_filters(beats: Iterable[B], filters: CatalogFilters) -> list[B]:
    """Filter then order; pure."""
    return sort_beats(filter_beats(beats, filters), filters.sort)


def _uniq_sorted(values: Iterable[str | None]) -> list[str]:
    return sorted({v for v in values if v})


def facet_options(beats: Sequence[BeatLike]) -> FacetOptions:
    """Distinct non-empty values per select filter, sorted."""
    return FacetOptions(
        genres=_uniq_sorted(b.genre for b in beats),
        types=_uniq_sorted(b.type for b in beats),
        instruments=_uniq_sorted(b.instrument for b in beats),
        keys=_uniq_sorted(b.key for b in beats),
    )


def query_beats(db: Session, filters: CatalogFilters, limit: int) -> list[Beat]:
    """Store read with the same filter semantics as filter_beats, newest first by default."""
    query = db.query(Beat)
    q = filters.q.strip()
    if q:
        haystack = func.lower(
            func.coalesce(Beat.title, "")
            + " "
            + func.coalesce(Beat.genre, "")
            + " "
            + func.coalesce(Beat.type, "")
            + " "
            + func.coalesce(Beat.instrument, "")
            + " "
            + func.coalesce(Beat.mood, "")
            + " "
            + func.coalesce(Beat.key, ""),
            type_=String,
        )
        query = query.filter(haystack.contains(q.lower(), autoescape=True))
    for field in _EXACT_FIELDS:
        wanted = getattr(filters, field)
        if wanted:
            query = query.filter(getattr(Beat, field) == wanted)
    bpm = func.coalesce(Beat.bpm, 0)
    if filters.bpm_min:
        query = query.filter(bpm >= filters.bpm_min)
    if filters.bpm_max:
        query = query.filter(bpm <= filters.bpm_max)

    if filters.sort == "bpmAsc":
        query = query.order_by(bpm.asc(), Beat.created_at.desc())
    elif filters.sort == "bpmDesc":
        query = query.order_by(bpm.desc(), Beat.created_at.desc())
    else:
        query = query.order_by(Beat.created_at.desc())
    return query.limit(limit).all()


def store_facet_options(db: Session) -> FacetOptions:
    """Distinct filter values across the whole beats table."""

    def distinct(column) -> list[str]:
        rows = db.query(column).filter(column.isnot(None)).distinct().all()
        return _uniq_sorted(r[0] for r in rows)

    return FacetOptions(
        genres=distinct(Beat.genre),
        types=distinct(Beat.type),
        instruments=distinct(Beat.instrument),
        keys=distinct(Beat.key),
    )
