"""API dependencies for authentication."""

from __future__ import annotations

from fastapi import Cookie, Depends, Header

from signaldash.core.exceptions import AuthenticationError
from signaldash.core.security import decode_access_token
from signaldash.repositories import auth_user_orm as auth_repo


__all__ = [
    "get_current_user",
    "get_current_user_id",
]


def _extract_token(
    authorization: str | None = Header(default=None),
    session: str | None = Cookie(default=None),
) -> str | None:
    """Extract JWT token from Authorization header or session cookie."""
    # Prefer Authorization header (for API clients)
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token

    # Fall back to session cookie (for browser clients)
    if session:
        return session

    return None


async def get_current_user(
    authorization: str | None = Header(default=None),
    session: str | None = Cookie(default=None),
) -> auth_repo.AuthUser | None:
    """
    Get the user behind the bearer token or session cookie (optional).

    Returns None if not authenticated, the token is invalid, or the user
    no longer exists.
    """
    token = _extract_token(authorization, session)
    if not token:
        return None

    try:
        token_data = decode_access_token(token)
    except AuthenticationError:
        return None

    return await auth_repo.get_user(token_data.sub)


async def get_current_user_id(
    user: auth_repo.AuthUser | None = Depends(get_current_user),
) -> int | None:
    """Database id of the caller, or None when unauthenticated."""
    return user.id if user else None
