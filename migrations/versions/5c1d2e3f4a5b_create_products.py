"""create products table

Revision ID: 5c1d2e3f4a5b
Revises:
Create Date: 2025-09-15 10:12:41.218734
"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from app.database import DEFAULT_SCHEMA

# --- Alembic identifiers ---
revision: str = "5c1d2e3f4a5b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLE = "products"
IDX = "ix_products_category_sub_category"


def upgrade() -> None:
    op.create_table(
        TABLE,
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("sub_category", sa.String(), nullable=False),
        sa.Column("sku", sa.String(64), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_products")),
        schema=DEFAULT_SCHEMA,
    )
    op.create_index(IDX, TABLE, ["category", "sub_category"], unique=False, schema=DEFAULT_SCHEMA)


def downgrade() -> None:
    op.drop_index(IDX, table_name=TABLE, schema=DEFAULT_SCHEMA)
    op.drop_table(TABLE, schema=DEFAULT_SCHEMA)
