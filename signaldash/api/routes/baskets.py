"""Stock basket API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from signaldash.api.dependencies import get_current_user_id
from signaldash.repositories import baskets_orm as baskets_repo
from signaldash.schemas.baskets import (
    BasketStockResponse,
    LatestBasketResponse,
    SaveBasketRequest,
    SaveBasketResponse,
    StockBasketResponse,
)
from signaldash.schemas.common import ErrorResponse


router = APIRouter(prefix="/baskets")


@router.get("/latest", response_model=LatestBasketResponse)
async def get_latest_basket(
    user_id: int | None = Depends(get_current_user_id),
) -> LatestBasketResponse:
    """Most recently created basket of the caller with its stocks."""
    lookup = await baskets_repo.get_most_recent_basket(user_id)
    if lookup.basket is None:
        if lookup.error:
            raise lookup.error
        return LatestBasketResponse()

    basket = StockBasketResponse(**lookup.basket)
    if lookup.error:
        # Basket found, stocks failed: keep the basket and report the error
        return LatestBasketResponse(basket=basket, error=ErrorResponse(**lookup.error.to_dict()))
    return LatestBasketResponse(
        basket=basket,
        stocks=[BasketStockResponse(**s) for s in lookup.stocks or []],
    )


@router.put("", response_model=SaveBasketResponse)
async def save_basket(
    payload: SaveBasketRequest,
    user_id: int | None = Depends(get_current_user_id),
) -> SaveBasketResponse:
    """Create or update a basket, replacing its stocks with the given list."""
    result = await baskets_repo.save_basket(user_id, payload.basket, payload.stocks)
    if result.error:
        raise result.error
    return SaveBasketResponse(basket_id=result.basket_id)
