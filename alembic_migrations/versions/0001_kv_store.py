"""kv_store table holding the serialized link collection

Revision ID: 0001_kv_store
Revises:
Create Date: 2025-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_kv_store"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "kv_store",
        sa.Column("key", sa.String(length=128), primary_key=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("kv_store")
