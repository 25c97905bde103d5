"""Signal source comparison chart data.

Only a static illustrative dataset ships today. Rendering code depends on
``ComparisonSource`` so a computed source can replace it.
"""

from __future__ import annotations

from typing import Protocol

from signaldash.core.config import settings
from signaldash.schemas.signals import (
    ComparisonPoint,
    ComparisonResponse,
    ComparisonSeries,
)


COMPARISON_SERIES = [
    ComparisonSeries(key="google_trends", label="Google Trends", color="#10b981"),
    ComparisonSeries(key="twitter", label="Twitter", color="#3b82f6"),
    ComparisonSeries(key="news", label="News", color="#f59e0b"),
]


class ComparisonSource(Protocol):
    """Provider of per-ticker sentiment by source."""

    is_mock: bool

    def get_points(self) -> list[ComparisonPoint]:
        ...


class MockComparisonSource:
    """Hard-coded comparison for six tickers. Not derived from fetched data."""

    is_mock = True

    POINTS = (
        ("AAPL", 0.5, 0.7, 0.6),
        ("MSFT", 0.6, 0.7, 0.5),
        ("AMZN", 0.4, 0.3, 0.2),
        ("GOOGL", 0.6, 0.8, 0.7),
        ("META", -0.3, -0.2, -0.1),
        ("TSLA", 0.3, 0.4, 0.5),
    )

    def get_points(self) -> list[ComparisonPoint]:
        return [
            ComparisonPoint(symbol=symbol, google_trends=trends, twitter=twitter, news=news)
            for symbol, trends, twitter, news in self.POINTS
        ]


_SOURCES = {
    "mock": MockComparisonSource,
}


def get_comparison_source(name: str | None = None) -> ComparisonSource:
    """Build the configured comparison source."""
    key = (name or settings.comparison_source).lower()
    try:
        return _SOURCES[key]()
    except KeyError:
        raise ValueError(f"Unknown comparison source: {key}") from None


def build_comparison_response(source: ComparisonSource | None = None) -> ComparisonResponse:
    source = source or get_comparison_source()
    return ComparisonResponse(
        is_mock=source.is_mock,
        series=COMPARISON_SERIES,
        data=source.get_points(),
    )
