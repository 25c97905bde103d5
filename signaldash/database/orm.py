"""SQLAlchemy ORM models for Signaldash.

This module defines all database tables using SQLAlchemy 2.0 ORM style.

Usage:
    from signaldash.database.orm import StockBasket, BasketStock
    from signaldash.database.connection import get_session
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    MetaData,
    String,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


# Naming convention for constraints and indexes (deterministic names for Alembic)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# JSONB on PostgreSQL, plain JSON elsewhere
JsonMap = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all ORM models with naming convention."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# =============================================================================
# AUTH
# =============================================================================


class AuthUser(Base):
    """User known to the identity provider."""
    __tablename__ = "auth_user"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    baskets: Mapped[list[StockBasket]] = relationship(back_populates="user")

    __table_args__ = (
        Index("idx_auth_user_username", "username"),
    )


# =============================================================================
# BASKETS
# =============================================================================


class StockBasket(Base):
    """Named, user-owned collection of stock allocations."""
    __tablename__ = "stock_baskets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("auth_user.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    source_weights: Mapped[dict] = mapped_column(JsonMap, nullable=False, default=dict)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Stamped by the store, not the server, so ordering follows save order
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[AuthUser] = relationship(back_populates="baskets")
    stocks: Mapped[list[BasketStock]] = relationship(
        back_populates="basket", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        Index("idx_stock_baskets_user", "user_id"),
        Index("idx_stock_baskets_created", "created_at", postgresql_ops={"created_at": "DESC"}),
    )


class BasketStock(Base):
    """One stock allocation inside a basket."""
    __tablename__ = "basket_stocks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    basket_id: Mapped[str] = mapped_column(ForeignKey("stock_baskets.id", ondelete="CASCADE"), nullable=False)
    symbol: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sector: Mapped[str] = mapped_column(String(100), nullable=False, default="Unknown")
    allocation: Mapped[float] = mapped_column(Float, nullable=False)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    basket: Mapped[StockBasket] = relationship(back_populates="stocks")

    __table_args__ = (
        Index("idx_basket_stocks_basket", "basket_id"),
    )
