"""Stock basket repository using SQLAlchemy ORM.

Both operations take the caller's user id explicitly and never raise: every
outcome comes back as a result object whose ``error`` the caller must check.

A save replaces the basket's stocks wholesale (delete all, insert all). The
basket write, the delete and the insert share one transaction, so a failure
at any step leaves the previous state intact.

Usage:
    from signaldash.repositories.baskets_orm import (
        get_most_recent_basket, save_basket,
    )
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, select, update

from signaldash.core.exceptions import (
    AppException,
    AuthenticationError,
    DatabaseError,
    NotFoundError,
)
from signaldash.core.logging import get_logger
from signaldash.database.connection import get_session
from signaldash.database.orm import BasketStock, StockBasket
from signaldash.schemas.baskets import BasketStockIn, StockBasketIn


logger = get_logger("repositories.baskets_orm")

UNKNOWN_SECTOR = "Unknown"


@dataclass
class BasketLookup:
    """Result of ``get_most_recent_basket``.

    All three fields None means the user has no basket yet (not an error).
    A basket with ``stocks=None`` and an error means its stocks failed to load.
    """

    basket: dict[str, Any] | None = None
    stocks: list[dict[str, Any]] | None = None
    error: AppException | None = None


@dataclass
class BasketSaveResult:
    """Result of ``save_basket``; ``basket_id`` is None whenever ``error`` is set."""

    basket_id: str | None = None
    error: AppException | None = None


def _not_authenticated() -> AuthenticationError:
    return AuthenticationError(message="User not authenticated", error_code="NOT_AUTHENTICATED")


def _db_error(action: str, exc: Exception) -> DatabaseError:
    return DatabaseError(message=f"Error {action}", details={"cause": type(exc).__name__})


# =============================================================================
# READ
# =============================================================================


async def get_most_recent_basket(user_id: int | None) -> BasketLookup:
    """Get the user's most recently created basket and its stocks.

    Args:
        user_id: Owner of the basket; None is reported as an authentication error

    Returns:
        BasketLookup with basket/stocks dicts, or the error that stopped the lookup
    """
    if user_id is None:
        return BasketLookup(error=_not_authenticated())

    try:
        async with get_session() as session:
            try:
                result = await session.execute(
                    select(StockBasket)
                    .where(StockBasket.user_id == user_id)
                    .order_by(StockBasket.created_at.desc())
                    .limit(1)
                )
                basket = result.scalar_one_or_none()
            except Exception as e:
                logger.error(f"Error fetching baskets: {e}")
                return BasketLookup(error=_db_error("fetching baskets", e))

            if basket is None:
                return BasketLookup()

            basket_dict = _basket_to_dict(basket)

            try:
                result = await session.execute(
                    select(BasketStock).where(BasketStock.basket_id == basket.id)
                )
                stocks = [_stock_to_dict(s) for s in result.scalars().all()]
            except Exception as e:
                logger.error(f"Error fetching stocks: {e}")
                return BasketLookup(basket=basket_dict, error=_db_error("fetching stocks", e))

            return BasketLookup(basket=basket_dict, stocks=stocks)
    except Exception as e:
        # Connection failures from the driver arrive unwrapped
        logger.error(f"Error getting most recent basket: {e}")
        return BasketLookup(error=_db_error("getting most recent basket", e))


# =============================================================================
# WRITE
# =============================================================================


async def save_basket(
    user_id: int | None,
    basket_data: StockBasketIn,
    stocks: Sequence[BasketStockIn],
) -> BasketSaveResult:
    """Create or update a basket and replace its stocks.

    Without ``basket_data.id`` a new basket is inserted under a fresh UUID.
    With an id, the row matching both id and ``user_id`` is updated; a miss
    is reported as NotFoundError so one user can't write into another's basket.

    Args:
        user_id: Owner of the basket; None is reported as an authentication error
        basket_data: Basket fields
        stocks: Full replacement list of stock allocations

    Returns:
        BasketSaveResult with the basket id, or the error that aborted the save
    """
    if user_id is None:
        return BasketSaveResult(error=_not_authenticated())

    basket_id = basket_data.id
    step = "saving basket"
    try:
        async with get_session() as session:
            now = datetime.now(UTC)

            if not basket_id:
                basket_id = str(uuid.uuid4())
                step = "creating basket"
                session.add(
                    StockBasket(
                        id=basket_id,
                        user_id=user_id,
                        name=basket_data.name,
                        created_at=now,
                        updated_at=now,
                        source_weights=basket_data.source_weights,
                        is_locked=basket_data.is_locked,
                    )
                )
                await session.flush()
                logger.info(f"Created basket {basket_id}")
            else:
                step = "updating basket"
                logger.info(
                    f"Updating existing basket {basket_id}",
                    extra={"extra_fields": {
                        "name": basket_data.name,
                        "source_weights": basket_data.source_weights,
                        "is_locked": basket_data.is_locked,
                    }},
                )
                result = await session.execute(
                    update(StockBasket)
                    .where(StockBasket.id == basket_id, StockBasket.user_id == user_id)
                    .values(
                        name=basket_data.name,
                        updated_at=now,
                        source_weights=basket_data.source_weights,
                        is_locked=basket_data.is_locked,
                    )
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    await session.rollback()
                    logger.warning(f"Basket {basket_id} not found for user {user_id}")
                    return BasketSaveResult(error=NotFoundError(message="Basket not found"))
                logger.info("Basket updated successfully")

            step = "deleting existing stocks"
            await session.execute(
                delete(BasketStock)
                .where(BasketStock.basket_id == basket_id)
                .execution_options(synchronize_session=False)
            )
            logger.info(f"Existing stocks deleted for basket {basket_id}")

            step = "inserting stocks"
            session.add_all([
                BasketStock(
                    id=str(uuid.uuid4()),
                    basket_id=basket_id,
                    symbol=stock.symbol,
                    name=stock.name,
                    sector=stock.sector or UNKNOWN_SECTOR,
                    allocation=stock.allocation,
                    is_locked=stock.is_locked,
                )
                for stock in stocks
            ])
            await session.commit()
            logger.info(f"Inserted {len(stocks)} stocks for basket {basket_id}")

            return BasketSaveResult(basket_id=basket_id)
    except Exception as e:
        logger.error(f"Error {step}: {e}")
        return BasketSaveResult(error=_db_error(step, e))


# =============================================================================
# HELPERS
# =============================================================================


def _basket_to_dict(basket: StockBasket) -> dict[str, Any]:
    """Convert StockBasket ORM to dict."""
    return {
        "id": basket.id,
        "user_id": basket.user_id,
        "name": basket.name,
        "source_weights": dict(basket.source_weights or {}),
        "is_locked": basket.is_locked,
        "created_at": basket.created_at,
        "updated_at": basket.updated_at,
    }


def _stock_to_dict(stock: BasketStock) -> dict[str, Any]:
    """Convert BasketStock ORM to dict."""
    return {
        "id": stock.id,
        "basket_id": stock.basket_id,
        "symbol": stock.symbol,
        "name": stock.name,
        "sector": stock.sector,
        "allocation": stock.allocation,
        "is_locked": stock.is_locked,
    }
