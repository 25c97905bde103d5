"""Stock basket schemas for API validation.

Usage:
    from signaldash.schemas.baskets import (
        StockBasketIn,
        BasketStockIn,
        SaveBasketRequest,
        LatestBasketResponse,
    )
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .common import ErrorResponse


# =============================================================================
# INPUT SCHEMAS
# =============================================================================


class StockBasketIn(BaseModel):
    """Basket fields supplied by the caller; ``id`` absent means create."""
    id: str | None = None
    name: str = Field(..., min_length=1, max_length=120)
    source_weights: dict[str, float] = Field(default_factory=dict)
    is_locked: bool = False


class BasketStockIn(BaseModel):
    """One stock allocation supplied by the caller."""
    symbol: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., max_length=255)
    sector: str | None = Field(None, max_length=100)
    allocation: float
    is_locked: bool = False


class SaveBasketRequest(BaseModel):
    """Request to save a basket and replace its stocks."""
    basket: StockBasketIn
    stocks: list[BasketStockIn] = Field(default_factory=list)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================


class BasketStockResponse(BaseModel):
    """Stored stock allocation."""
    id: str
    basket_id: str
    symbol: str
    name: str
    sector: str
    allocation: float
    is_locked: bool


class StockBasketResponse(BaseModel):
    """Stored basket."""
    id: str
    user_id: int
    name: str
    source_weights: dict[str, float]
    is_locked: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LatestBasketResponse(BaseModel):
    """Most recent basket of the caller, all fields null when none exists.

    A basket with null ``stocks`` and an ``error`` means the basket was found
    but its stocks failed to load.
    """
    basket: StockBasketResponse | None = None
    stocks: list[BasketStockResponse] | None = None
    error: ErrorResponse | None = None


class SaveBasketResponse(BaseModel):
    """Identifier of the saved (possibly newly created) basket."""
    basket_id: str
