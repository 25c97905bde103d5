"""Database module with SQLAlchemy async engine and ORM models."""

from .connection import (
    close_sqlalchemy_engine,
    db_healthcheck,
    get_async_database_url,
    get_engine,
    get_session,
    init_sqlalchemy_engine,
)
from .orm import (
    AuthUser,
    BasketStock,
    Base,
    StockBasket,
)


__all__ = [
    "AuthUser",
    "Base",
    "BasketStock",
    "StockBasket",
    "close_sqlalchemy_engine",
    "db_healthcheck",
    "get_async_database_url",
    "get_engine",
    "get_session",
    "init_sqlalchemy_engine",
]
