"""ORM model for download records (append-only)."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id


class Download(Base):
    """One granted download of a beat by an account. Never updated after insert."""

    __tablename__ = "downloads"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    beat_id = Column(
        String(36),
        ForeignKey("beats.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    beat = relationship("Beat", lazy="joined")
