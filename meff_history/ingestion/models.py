"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Category(str, Enum):
    """The two parallel datasets MEFF publishes for every period."""

    PRIMARY = "primary"
    ALTERNATE = "alternate"

    @property
    def legacy_suffix(self) -> str:
        """One-letter file suffix used up to 2006 (``a`` equities, ``i`` IBEX)."""

        return "a" if self is Category.PRIMARY else "i"

    @property
    def monthly_suffix(self) -> str:
        """Three-letter file suffix used from 2007 (``ACO`` equities, ``FIE`` IBEX)."""

        return "ACO" if self is Category.PRIMARY else "FIE"


class SchemaVersion(str, Enum):
    """CSV column layout of the archive entries."""

    OLD = "old"
    NEW = "new"


class Era(str, Enum):
    """File granularity used by MEFF for a given year."""

    YEARLY = "yearly"
    SEMESTER = "semester"
    MONTHLY = "monthly"


LAYOUTS: dict[SchemaVersion, tuple[str, ...]] = {
    SchemaVersion.OLD: (
        "session_date",
        "contract_code",
        "cfi_code",
        "open",
        "high",
        "low",
        "close",
        "settlement",
        "volume",
        "open_interest",
    ),
    SchemaVersion.NEW: (
        "session_date",
        "contract_code",
        "cfi_code",
        "expiration_date",
        "strike_price",
        "bid",
        "ask",
        "open",
        "high",
        "low",
        "close",
        "settlement",
        "volume",
        "open_interest",
    ),
}


@dataclass(frozen=True, slots=True)
class QuoteRecord:
    """One exchange session of one contract, as read from a MEFF archive."""

    session_date: date
    contract_code: str
    cfi_code: str
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float | None = None
    settlement: float | None = None
    volume: float | None = None
    open_interest: float | None = None
    expiration_date: date | None = None
    strike_price: float | None = None
    bid: float | None = None
    ask: float | None = None
    fields: tuple[str, ...] = field(default=(), compare=False, repr=False)

    @property
    def field_count(self) -> int:
        """Number of raw CSV fields the record was built from."""

        return len(self.fields)

    @property
    def schema(self) -> SchemaVersion | None:
        for version, layout in LAYOUTS.items():
            if len(layout) == self.field_count:
                return version
        return None

    def is_option(self) -> bool:
        return self.cfi_code.startswith(OPTION_CFI_PREFIXES)

    def is_listed_security(self) -> bool:
        return self.cfi_code.startswith(TICKER_CFI_PREFIX)


OPTION_CFI_PREFIXES = ("OP", "OC")
TICKER_CFI_PREFIX = "ES"

# Attribute order used when records are exported (CSV, DataFrame).
QUOTE_COLUMNS = (
    "session_date",
    "contract_code",
    "cfi_code",
    "expiration_date",
    "strike_price",
    "bid",
    "ask",
    "open",
    "high",
    "low",
    "close",
    "settlement",
    "volume",
    "open_interest",
)


__all__ = [
    "Category",
    "SchemaVersion",
    "Era",
    "LAYOUTS",
    "QuoteRecord",
    "OPTION_CFI_PREFIXES",
    "TICKER_CFI_PREFIX",
    "QUOTE_COLUMNS",
]
