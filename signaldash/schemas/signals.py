"""Signal schemas.

``Signal`` is the validation boundary for the upstream feed: a record that
does not match it fails the whole fetch instead of leaking half-typed rows
into the view.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


SentimentFilter = Literal["all", "positive", "negative", "neutral"]
SortKey = Literal["date", "symbol", "sentiment_score", "tweets"]
SortOrder = Literal["asc", "desc"]
ViewStatus = Literal["loading", "error", "empty", "populated"]


class Signal(BaseModel):
    """One row of pre-computed sentiment/price data for a ticker on a date."""

    model_config = ConfigDict(extra="ignore")

    date: str
    comp_symbol: str
    analyzed_tweets: int | None = Field(default=0, ge=0)
    sentiment_score: float
    sentiment: str
    entry_price: float = Field(ge=0)


class SignalSummary(BaseModel):
    """Aggregate statistics over one successful fetch."""
    total: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    total_tweets: int = 0
    last_update: str = ""


class SignalRow(BaseModel):
    """Display-ready table row."""
    date: str
    symbol: str
    analyzed_tweets: int
    sentiment_score: str
    sentiment: str
    sentiment_tone: Literal["positive", "negative", "neutral"]
    entry_price: str


class SignalTableView(BaseModel):
    """Render state of the signals table.

    Exactly one of loading, error, empty or populated; ``rows`` is only
    non-empty in the populated state.
    """
    status: ViewStatus
    message: str | None = None
    rows: list[SignalRow] = Field(default_factory=list)
    summary: SignalSummary = Field(default_factory=SignalSummary)
    sentiment: str = "all"
    search: str = ""
    sort_by: str = "date"
    sort_order: SortOrder = "asc"


class ComparisonPoint(BaseModel):
    """Per-ticker sentiment across signal sources."""
    symbol: str
    google_trends: float
    twitter: float
    news: float


class ComparisonSeries(BaseModel):
    """Bar series metadata for the comparison chart."""
    key: str
    label: str
    color: str


class ComparisonResponse(BaseModel):
    """Signal source comparison chart payload."""
    is_mock: bool
    series: list[ComparisonSeries]
    data: list[ComparisonPoint]
