"""Baseline schema: users, stock baskets and basket stocks.

Revision ID: 001_baseline
Revises:
Create Date: 2026-03-01
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_baseline"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create auth_user, stock_baskets and basket_stocks."""
    op.create_table(
        "auth_user",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default=sa.text("FALSE")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
    )
    op.create_index("idx_auth_user_username", "auth_user", ["username"])

    op.create_table(
        "stock_baskets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("auth_user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("source_weights", postgresql.JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("is_locked", sa.Boolean, nullable=False, server_default=sa.text("FALSE")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_stock_baskets_user", "stock_baskets", ["user_id"])
    op.create_index(
        "idx_stock_baskets_created",
        "stock_baskets",
        ["created_at"],
        postgresql_ops={"created_at": "DESC"},
    )

    op.create_table(
        "basket_stocks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("basket_id", sa.String(36), sa.ForeignKey("stock_baskets.id", ondelete="CASCADE"), nullable=False),
        sa.Column("symbol", sa.String(20), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sector", sa.String(100), nullable=False, server_default="Unknown"),
        sa.Column("allocation", sa.Float, nullable=False),
        sa.Column("is_locked", sa.Boolean, nullable=False, server_default=sa.text("FALSE")),
    )
    op.create_index("idx_basket_stocks_basket", "basket_stocks", ["basket_id"])


def downgrade() -> None:
    """Drop basket tables and users."""
    op.drop_index("idx_basket_stocks_basket", table_name="basket_stocks")
    op.drop_table("basket_stocks")
    op.drop_index("idx_stock_baskets_created", table_name="stock_baskets")
    op.drop_index("idx_stock_baskets_user", table_name="stock_baskets")
    op.drop_table("stock_baskets")
    op.drop_index("idx_auth_user_username", table_name="auth_user")
    op.drop_table("auth_user")
