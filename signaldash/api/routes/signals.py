"""Signal viewer API routes."""

from __future__ import annotations

from fastapi import APIRouter, Query

from signaldash.schemas.signals import (
    ComparisonResponse,
    SentimentFilter,
    Signal,
    SignalSummary,
    SignalTableView,
    SortKey,
    SortOrder,
)
from signaldash.services import signal_feed
from signaldash.services.comparison import build_comparison_response
from signaldash.services.signal_view import SignalViewer, compute_summary


router = APIRouter(prefix="/signals")


@router.get("", response_model=list[Signal])
async def list_signals() -> list[Signal]:
    """Full signal list with normalized dates."""
    return await signal_feed.fetch_signals()


@router.get("/summary", response_model=SignalSummary)
async def get_summary() -> SignalSummary:
    """Aggregate counts over the current signal list."""
    return compute_summary(await signal_feed.fetch_signals())


@router.get("/view", response_model=SignalTableView)
async def get_view(
    sentiment: SentimentFilter = Query("all", description="Sentiment filter"),
    search: str = Query("", max_length=20, description="Symbol substring"),
    sort_by: SortKey = Query("date", description="Sort key"),
    sort_order: SortOrder = Query("asc", description="Sort direction"),
) -> SignalTableView:
    """Render state of the signals table for the given criteria.

    Upstream failures are reported in the view (``status="error"``), not as
    an HTTP error.
    """
    viewer = SignalViewer(fetcher=signal_feed.fetch_signals)
    await viewer.load()
    viewer.set_filters(
        sentiment=sentiment, search=search, sort_by=sort_by, sort_order=sort_order
    )
    return viewer.render()


@router.get("/comparison", response_model=ComparisonResponse)
async def get_comparison() -> ComparisonResponse:
    """Static signal source comparison chart data."""
    return build_comparison_response()
