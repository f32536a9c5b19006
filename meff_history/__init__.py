"""Public interface for the meff_history package."""

from __future__ import annotations

from datetime import date
from enum import Enum
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, List

from meff_history.exceptions import (
    MalformedArchive,
    MalformedRecord,
    MeffHistoryError,
    TransferError,
    UnsupportedPeriod,
)
from meff_history.ingestion.archive import iter_quotes
from meff_history.ingestion.models import QUOTE_COLUMNS, Category, QuoteRecord
from meff_history.ingestion.transfer import ArchiveSource, TransferCache
from meff_history.ingestion.urls import resolve_url, schema_for_year
from meff_history.utils.date_range import DateRange, period_months, previous_month
from meff_history.utils.logger import get_logger
from meff_history.utils.meff import DEFAULT_TIMEOUT, MEFF_BASE_URL

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    import pandas as pd

__all__ = [
    "__version__",
    "MeffHistory",
    "GapPolicy",
    "ScanState",
    "Category",
    "QuoteRecord",
    "TransferCache",
    "MeffHistoryError",
    "UnsupportedPeriod",
    "TransferError",
    "MalformedRecord",
    "MalformedArchive",
]

try:
    __version__ = importlib_metadata.version("meff-history")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

LOGGER = get_logger(__name__)


class GapPolicy(str, Enum):
    """What a range query does when a year yields nothing in either category."""

    STOP = "stop"
    CONTINUE = "continue"


class ScanState(str, Enum):
    """Per-year state of the category fallback used by range queries."""

    SCANNING_PRIMARY = "scanning_primary"
    SCANNING_ALTERNATE = "scanning_alternate"
    DONE = "done"

    @property
    def category(self) -> Category:
        if self is ScanState.SCANNING_ALTERNATE:
            return Category.ALTERNATE
        return Category.PRIMARY


class MeffHistory:
    """Query MEFF historical archives for quotes, options and tickers."""

    __slots__ = ("source", "base_url", "_today", "_tickers")

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        source: ArchiveSource | None = None,
        *,
        cache_dir: str | Path | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        today: Callable[[], date] = date.today,
        base_url: str = MEFF_BASE_URL,
    ) -> None:
        """Configure where archives come from.

        ``source`` is any object exposing ``fetch(url) -> bytes``. When it is
        omitted a :class:`TransferCache` is built, keeping its files under
        ``cache_dir`` (by default ``MEFFCACHE`` inside the base settings
        directory) and applying ``timeout`` to every request.
        """

        self.source: ArchiveSource = (
            source if source is not None else TransferCache(cache_dir, timeout=timeout)
        )
        self.base_url = base_url
        self._today = today
        self._tickers: list[str] | None = None

    def get_historical_quotes(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
        *,
        gap_policy: GapPolicy = GapPolicy.STOP,
    ) -> List[QuoteRecord]:
        """Return every session of ``ticker`` between both dates (inclusive).

        Years are scanned in the equities/options category first. When a year
        ends without any accumulated match the same year is scanned again in
        the index category; if that also yields nothing ``gap_policy`` decides
        whether the scan stops (default) or moves on to the next year.

        The result is ordered by session date, most recent first.
        """

        window = DateRange(start_date, end_date)
        quotes: list[QuoteRecord] = []
        state = ScanState.SCANNING_PRIMARY
        year = window.start.year
        while state is not ScanState.DONE and year <= window.end.year:
            category = state.category
            for month in period_months(year, window):
                quotes.extend(
                    quote
                    for quote in self._scan(year, month, category)
                    if quote.contract_code == ticker and quote.session_date in window
                )
            state, year = self._next_state(state, year, found=bool(quotes), gap_policy=gap_policy)

        LOGGER.info("Gathered %s quotes for %s (%s → %s)", len(quotes), ticker, start_date, end_date)
        return sorted(quotes, key=lambda quote: quote.session_date, reverse=True)

    def get_options(self, ticker: str, on: date) -> List[QuoteRecord]:
        """Return the PUT and CALL options on ``ticker`` quoted on ``on``."""

        quotes: list[QuoteRecord] = []
        for category in (Category.PRIMARY, Category.ALTERNATE):
            quotes.extend(
                quote
                for quote in self._scan(on.year, on.month, category)
                if quote.session_date == on
                and quote.is_option()
                and quote.contract_code[1:].startswith(ticker)
            )
            # Stop at the first category holding options.
            if quotes:
                break
        return quotes

    def get_ticker_list(self) -> List[str]:
        """Return the tickers listed by MEFF during the previous calendar month.

        The previous month is used so the answer does not change every day.
        The list is computed once per instance.
        """

        if self._tickers is None:
            year, month = previous_month(self._today())
            tickers: set[str] = set()
            for category in (Category.PRIMARY, Category.ALTERNATE):
                tickers.update(
                    quote.contract_code
                    for quote in self._scan(year, month, category)
                    if quote.is_listed_security()
                )
            self._tickers = sorted(tickers)
        return list(self._tickers)

    def history_frame(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
        *,
        gap_policy: GapPolicy = GapPolicy.STOP,
    ) -> "pd.DataFrame":
        """Same as :meth:`get_historical_quotes` but as a pandas DataFrame."""

        quotes = self.get_historical_quotes(ticker, start_date, end_date, gap_policy=gap_policy)
        return self.quotes_to_frame(quotes)

    @staticmethod
    def quotes_to_frame(quotes: Iterable[QuoteRecord]) -> "pd.DataFrame":
        import pandas as pd

        rows = [{column: getattr(quote, column) for column in QUOTE_COLUMNS} for quote in quotes]
        return pd.DataFrame(rows, columns=list(QUOTE_COLUMNS))

    def _scan(self, year: int, month: int, category: Category) -> Iterable[QuoteRecord]:
        url = resolve_url(year, month, category, base_url=self.base_url)
        archive = self.source.fetch(url)
        return iter_quotes(archive, schema_for_year(year))

    @staticmethod
    def _next_state(
        state: ScanState,
        year: int,
        *,
        found: bool,
        gap_policy: GapPolicy,
    ) -> tuple[ScanState, int]:
        if found:
            return state, year + 1
        if state is ScanState.SCANNING_PRIMARY:
            LOGGER.info("No quotes found for %s, retrying with the index category", year)
            return ScanState.SCANNING_ALTERNATE, year
        if gap_policy is GapPolicy.CONTINUE:
            return ScanState.SCANNING_PRIMARY, year + 1
        LOGGER.info("No quotes found for %s in either category, stopping", year)
        return ScanState.DONE, year
