"""Core infrastructure: settings, security, logging, exceptions."""

from .config import settings
from .exceptions import (
    AppException,
    AuthenticationError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
)
from .security import (
    TokenData,
    create_access_token,
    decode_access_token,
)


__all__ = [
    "AppException",
    "AuthenticationError",
    "DatabaseError",
    "ExternalServiceError",
    "NotFoundError",
    "TokenData",
    "create_access_token",
    "decode_access_token",
    "settings",
]
