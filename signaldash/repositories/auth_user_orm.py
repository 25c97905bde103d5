"""Auth user repository using SQLAlchemy ORM.

Usage:
    from signaldash.repositories.auth_user_orm import get_user
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select

from signaldash.core.logging import get_logger
from signaldash.database.connection import get_session
from signaldash.database.orm import AuthUser as AuthUserORM


logger = get_logger("repositories.auth_user_orm")


@dataclass
class AuthUser:
    """User resolved from a verified token."""

    id: int
    username: str
    is_admin: bool = False

    @classmethod
    def from_orm(cls, user: AuthUserORM) -> AuthUser:
        """Create from ORM model."""
        return cls(
            id=user.id,
            username=user.username,
            is_admin=user.is_admin or False,
        )


async def get_user(username: str) -> AuthUser | None:
    """Get a user by username."""
    async with get_session() as session:
        result = await session.execute(
            select(AuthUserORM).where(AuthUserORM.username == username.lower())
        )
        user = result.scalar_one_or_none()

        if user:
            return AuthUser.from_orm(user)
        return None


async def create_user(username: str, is_admin: bool = False) -> AuthUser:
    """Register a user known to the identity provider."""
    async with get_session() as session:
        user = AuthUserORM(username=username.lower(), is_admin=is_admin)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        logger.info(f"Registered user {user.username}")
        return AuthUser.from_orm(user)
