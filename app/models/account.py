"""ORM model for storefront accounts (credentials, role and subscription state)."""

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, Column, DateTime, String, func

from app.models.base import Base, new_id


class Account(Base):
    """
    Registered user identity with credentials and entitlement state.

    role: 'USER' or 'ADMIN'
    subscription_status: 'INACTIVE', 'ACTIVE', 'PAST_DUE' or 'CANCELED'
    password_hash is null for accounts that cannot sign in with credentials.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('USER', 'ADMIN')", name="ck_users_role"),
        CheckConstraint(
            "subscription_status IN ('INACTIVE', 'ACTIVE', 'PAST_DUE', 'CANCELED')",
            name="ck_users_subscription_status",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(16), nullable=False, default="USER", server_default="USER")
    subscription_status = Column(
        String(16),
        nullable=False,
        default="INACTIVE",
        server_default="INACTIVE",
    )
    subscription_current_period_end = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )
