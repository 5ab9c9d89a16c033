"""ORM model for catalog beats. Read-only from the API's point of view."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base, new_id


class Beat(Base):
    """Catalog item: one audio beat with its musical attributes and a preview reference."""

    __tablename__ = "beats"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    bpm = Column(Integer, nullable=True)
    genre = Column(String(64), nullable=True, index=True)
    type = Column(String(64), nullable=True)
    instrument = Column(String(64), nullable=True)
    key = Column(String(16), nullable=True)
    mood = Column(String(64), nullable=True)
    preview_url = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        index=True,
    )
