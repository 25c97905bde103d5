"""Business logic services."""

from . import comparison, signal_feed, signal_view


__all__ = [
    "comparison",
    "signal_feed",
    "signal_view",
]
