"""SQLAlchemy ORM models."""

from app.models.account import Account
from app.models.base import Base
from app.models.beat import Beat
from app.models.download import Download

__all__ = ["Account", "Base", "Beat", "Download"]
