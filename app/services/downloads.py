"""Download records: grant (append) and account history."""

import logging

from sqlalchemy.orm import Session

from app.models import Beat, Download

logger = logging.getLogger(__name__)

RECENT_DOWNLOADS_LIMIT = 10


def record_download(db: Session, account_id: str, beat: Beat) -> Download:
    """Append a download record for a granted download."""
    download = Download(user_id=account_id, beat_id=beat.id)
    db.add(download)
    db.commit()
    db.refresh(download)
    logger.info(
        "Download granted",
        extra={"account_id": account_id, "beat_id": beat.id, "download_id": download.id},
    )
    return download


def count_downloads(db: Session, account_id: str) -> int:
    return db.query(Download).filter(Download.user_id == account_id).count()


def recent_downloads(
    db: Session,
    account_id: str,
    limit: int = RECENT_DOWNLOADS_LIMIT,
) -> list[Download]:
    """Most recent downloads first, each with its beat loaded."""
    return (
        db.query(Download)
        .filter(Download.user_id == account_id)
        .order_by(Download.created_at.desc())
        .limit(limit)
        .all()
    )
