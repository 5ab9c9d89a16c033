"""Restrict users.role and users.subscription_status to the known values.

Revision ID: 20261003000000
Revises: 20261002000000
Create Date: 2026-10-03

"""
from typing import Sequence, Union

from alembic import op

revision: str = "20261003000000"
down_revision: Union[str, None] = "20261002000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_check_constraint(
        "ck_users_role",
        "users",
        "role IN ('USER', 'ADMIN')",
    )
    op.create_check_constraint(
        "ck_users_subscription_status",
        "users",
        "subscription_status IN ('INACTIVE', 'ACTIVE', 'PAST_DUE', 'CANCELED')",
    )


def downgrade() -> None:
    op.drop_constraint("ck_users_subscription_status", "users", type_="check")
    op.drop_constraint("ck_users_role", "users", type_="check")
