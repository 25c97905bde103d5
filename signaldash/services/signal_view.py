"""Signal viewer: date normalization, aggregates, filtering, sorting, render state.

All functions here are pure over their inputs. ``SignalViewer`` wires them to
a single activation fetch and the user's filter/sort criteria.
"""

from __future__ import annotations

import locale
import re
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone

from dateutil import parser as date_parser

from signaldash.core.logging import get_logger
from signaldash.schemas.signals import (
    ComparisonPoint,
    Signal,
    SignalRow,
    SignalSummary,
    SignalTableView,
)
from signaldash.services.comparison import ComparisonSource, get_comparison_source


logger = get_logger("services.signal_view")

ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
SENTIMENTS = ("positive", "negative", "neutral")

LOADING_MESSAGE = "Loading sentiment data..."
ERROR_MESSAGE = "Failed to load Twitter Signals."
EMPTY_MESSAGE = "No Twitter signals found matching your criteria."


# =============================================================================
# DATES
# =============================================================================


def parse_date(value: str | None) -> datetime | None:
    """Parse a date string in any common format into an aware UTC datetime.

    Naive values are taken as UTC. Returns None when the value can't be parsed
    or its UTC equivalent falls outside the datetime range.
    """
    if not value:
        return None
    try:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            parsed = date_parser.parse(value)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def normalize_date(value: str | None) -> str:
    """Normalize a date string to ``YYYY-MM-DD``.

    Values already in that form pass through untouched; unparsable values
    come back as-is.
    """
    if not value:
        return ""
    if ISO_DATE_RE.fullmatch(value):
        return value
    parsed = parse_date(value)
    if parsed is None:
        logger.debug(f"Keeping unparsable date {value!r}")
        return value
    return parsed.date().isoformat()


def normalize_signals(signals: Sequence[Signal]) -> list[Signal]:
    """Return copies of the signals with normalized dates."""
    return [s.model_copy(update={"date": normalize_date(s.date)}) for s in signals]


# =============================================================================
# AGGREGATES
# =============================================================================


def compute_summary(signals: Sequence[Signal]) -> SignalSummary:
    """Aggregate counts over the fetched signals.

    ``last_update`` is the date of the first record as delivered, which is not
    necessarily the most recent one.
    """
    counts = {name: 0 for name in SENTIMENTS}
    for signal in signals:
        key = signal.sentiment.lower()
        if key in counts:
            counts[key] += 1

    return SignalSummary(
        total=len(signals),
        positive=counts["positive"],
        negative=counts["negative"],
        neutral=counts["neutral"],
        total_tweets=sum(s.analyzed_tweets or 0 for s in signals),
        last_update=normalize_date(signals[0].date) if signals else "N/A",
    )


# =============================================================================
# FILTER & SORT
# =============================================================================


def filter_signals(
    signals: Sequence[Signal],
    sentiment: str = "all",
    search: str = "",
) -> list[Signal]:
    """Keep signals matching both the sentiment and the symbol search."""
    result = list(signals)

    if sentiment and sentiment.lower() != "all":
        wanted = sentiment.lower()
        result = [s for s in result if s.sentiment.lower() == wanted]

    if search:
        query = search.lower()
        result = [s for s in result if query in s.comp_symbol.lower()]

    return result


def _date_key(signal: Signal) -> tuple[int, float]:
    parsed = parse_date(signal.date)
    # Unparsable dates sort first
    if parsed is None:
        return (0, 0.0)
    return (1, parsed.timestamp())


def _symbol_key(signal: Signal) -> tuple[str, str]:
    return (locale.strxfrm(signal.comp_symbol.casefold()), locale.strxfrm(signal.comp_symbol))


SORT_KEYS: dict[str, Callable[[Signal], object]] = {
    "date": _date_key,
    "symbol": _symbol_key,
    "sentiment_score": lambda s: s.sentiment_score,
    "tweets": lambda s: s.analyzed_tweets or 0,
}


def sort_signals(
    signals: Sequence[Signal],
    sort_by: str = "date",
    sort_order: str = "asc",
) -> list[Signal]:
    """Sort ascending by the given key; ``desc`` reverses the ascending order.

    Unknown keys leave the input order alone.
    """
    key = SORT_KEYS.get(sort_by)
    result = sorted(signals, key=key) if key else list(signals)
    if sort_order == "desc":
        result.reverse()
    return result


def apply_view(
    signals: Sequence[Signal],
    sentiment: str = "all",
    search: str = "",
    sort_by: str = "date",
    sort_order: str = "asc",
) -> list[Signal]:
    """Filter then sort."""
    return sort_signals(filter_signals(signals, sentiment, search), sort_by, sort_order)


# =============================================================================
# RENDERING
# =============================================================================


def _tone(sentiment: str) -> str:
    lowered = sentiment.lower()
    if lowered in ("positive", "negative"):
        return lowered
    return "neutral"


def to_row(signal: Signal) -> SignalRow:
    """Format a signal for display."""
    return SignalRow(
        date=signal.date,
        symbol=signal.comp_symbol.upper(),
        analyzed_tweets=signal.analyzed_tweets or 0,
        sentiment_score=f"{signal.sentiment_score:.2f}",
        sentiment=signal.sentiment,
        sentiment_tone=_tone(signal.sentiment),
        entry_price=f"${signal.entry_price:.2f}",
    )


def render_table(
    rows: Sequence[Signal],
    loading: bool,
    error: str | None,
) -> tuple[str, str | None, list[SignalRow]]:
    """Pick the render state: loading, then error, then empty, then populated."""
    if loading:
        return "loading", LOADING_MESSAGE, []
    if error:
        return "error", error, []
    if not rows:
        return "empty", EMPTY_MESSAGE, []
    return "populated", None, [to_row(s) for s in rows]


class SignalViewer:
    """Signals page state: one fetch on activation, recompute on criteria change.

    The fetcher is expected to return signals with dates already normalized,
    as ``signal_feed.fetch_signals`` does.
    """

    def __init__(
        self,
        fetcher: Callable[[], Awaitable[list[Signal]]] | None = None,
        comparison_source: ComparisonSource | None = None,
    ):
        if fetcher is None:
            from signaldash.services.signal_feed import fetch_signals

            fetcher = fetch_signals
        self._fetch = fetcher
        self._comparison_source = comparison_source or get_comparison_source()

        self.data: list[Signal] = []
        self.filtered: list[Signal] = []
        self.summary = SignalSummary()
        self.comparison: list[ComparisonPoint] = []
        self.loading = True
        self.error: str | None = None

        self.sentiment = "all"
        self.search = ""
        self.sort_by = "date"
        self.sort_order = "asc"

    async def load(self) -> None:
        """Fetch signals once. Failures set the error state; there is no retry."""
        if not self.loading:
            return
        try:
            data = list(await self._fetch())
            self.data = data
            self.summary = compute_summary(data)
            self.comparison = self._comparison_source.get_points()
            self._recompute()
        except Exception as e:
            logger.warning(f"Signal fetch failed: {e}")
            self.error = ERROR_MESSAGE
        finally:
            self.loading = False

    def set_filters(
        self,
        *,
        sentiment: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> None:
        """Update any of the filter/sort criteria and recompute."""
        if sentiment is not None:
            self.sentiment = sentiment
        if search is not None:
            self.search = search
        if sort_by is not None:
            self.sort_by = sort_by
        if sort_order is not None:
            self.sort_order = sort_order
        self._recompute()

    def toggle_sort_order(self) -> None:
        self.set_filters(sort_order="desc" if self.sort_order == "asc" else "asc")

    def _recompute(self) -> None:
        self.filtered = apply_view(
            self.data, self.sentiment, self.search, self.sort_by, self.sort_order
        )

    def render(self) -> SignalTableView:
        status, message, rows = render_table(self.filtered, self.loading, self.error)
        return SignalTableView(
            status=status,
            message=message,
            rows=rows,
            summary=self.summary,
            sentiment=self.sentiment,
            search=self.search,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
        )
