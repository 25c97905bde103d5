"""API routes package."""

from . import baskets, health, signals


__all__ = [
    "baskets",
    "health",
    "signals",
]
