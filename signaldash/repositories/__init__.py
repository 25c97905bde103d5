"""Data access layer repositories.

Each repository module provides async functions for database operations
using the SQLAlchemy ORM models from `signaldash.database.orm` with the
`get_session()` context manager.

- auth_user_orm: users resolved from verified tokens
- baskets_orm: stock baskets and their stock allocations
"""

from . import auth_user_orm
from . import baskets_orm

__all__ = [
    "auth_user_orm",
    "baskets_orm",
]
