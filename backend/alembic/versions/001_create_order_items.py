"""Create order_items.

Revision ID: 001_order_items
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_order_items"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "order_items",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("order_id", sa.String(24), nullable=True),
        sa.Column("product_id", sa.String(24), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=True),
        sa.Column("price", sa.Float, nullable=True),
        sa.Column("discount", sa.Float, nullable=True),
        sa.Column("total_price", sa.Float, nullable=True),
        sa.Column("status", sa.String(32), nullable=True),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("added_by", sa.String(64), nullable=True),
        sa.Column("updated_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])
    op.create_index("ix_order_items_product_id", "order_items", ["product_id"])
    op.create_index("ix_order_items_status", "order_items", ["status"])
    op.create_index("ix_order_items_is_deleted", "order_items", ["is_deleted"])


def downgrade() -> None:
    op.drop_index("ix_order_items_is_deleted", table_name="order_items")
    op.drop_index("ix_order_items_status", table_name="order_items")
    op.drop_index("ix_order_items_product_id", table_name="order_items")
    op.drop_index("ix_order_items_order_id", table_name="order_items")
    op.drop_table("order_items")
