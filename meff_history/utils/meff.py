"""MEFF-specific constants and invariants used across the package."""

from __future__ import annotations

from meff_history.exceptions import UnsupportedPeriod

MEFF_BASE_URL = "http://www.meff.es/docs/Ficheros/Descarga/dRV/"
MEFF_MIN_YEAR = 1993
MEFF_MIN_YEAR_MESSAGE = "Data is only available from year 1993 when using the MEFF market data provider."

# Last year published in the old CSV layout; monthly archives start the year after.
MEFF_LAST_OLD_FORMAT_YEAR = 2006

DEFAULT_TIMEOUT = 30.0


def enforce_meff_min_year(*years: int) -> None:
    """Ensure all provided years are on/after :data:`MEFF_MIN_YEAR`."""

    for year in years:
        if year < MEFF_MIN_YEAR:
            raise UnsupportedPeriod(year, MEFF_MIN_YEAR_MESSAGE)


__all__ = [
    "MEFF_BASE_URL",
    "MEFF_MIN_YEAR",
    "MEFF_MIN_YEAR_MESSAGE",
    "MEFF_LAST_OLD_FORMAT_YEAR",
    "DEFAULT_TIMEOUT",
    "enforce_meff_min_year",
]
