"""Pydantic schemas for API request/response validation."""

from .baskets import (
    BasketStockIn,
    BasketStockResponse,
    LatestBasketResponse,
    SaveBasketRequest,
    SaveBasketResponse,
    StockBasketIn,
    StockBasketResponse,
)
from .common import (
    ErrorResponse,
    HealthResponse,
)
from .signals import (
    ComparisonPoint,
    ComparisonResponse,
    ComparisonSeries,
    Signal,
    SignalRow,
    SignalSummary,
    SignalTableView,
)


__all__ = [
    "BasketStockIn",
    "BasketStockResponse",
    "ComparisonPoint",
    "ComparisonResponse",
    "ComparisonSeries",
    "ErrorResponse",
    "HealthResponse",
    "LatestBasketResponse",
    "SaveBasketRequest",
    "SaveBasketResponse",
    "Signal",
    "SignalRow",
    "SignalSummary",
    "SignalTableView",
    "StockBasketIn",
    "StockBasketResponse",
]
