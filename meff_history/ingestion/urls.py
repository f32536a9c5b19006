"""Map MEFF periods to the URL of the archive that holds them.

MEFF changed the layout of its historical downloads several times:

* 1993-1997 and 1999-2000: one archive per year (``HP{yy}000{a|i}.zip``);
* 1998 and 2001-2006: one archive per semester, ``1s0`` for January-June and
  ``000`` for July-December;
* from 2007: one archive per month (``HP{yy}{mm}{ACO|FIE}.zip``).

The category suffix switches from one letter to three letters in 2007.
"""

from __future__ import annotations

from meff_history.ingestion.models import Category, Era, SchemaVersion
from meff_history.utils.meff import MEFF_BASE_URL, MEFF_LAST_OLD_FORMAT_YEAR, enforce_meff_min_year


def era_for_year(year: int) -> Era:
    """Return the archive granularity MEFF used for ``year``."""

    enforce_meff_min_year(year)
    if year <= 1997 or 1999 <= year <= 2000:
        return Era.YEARLY
    if year == 1998 or 2001 <= year <= MEFF_LAST_OLD_FORMAT_YEAR:
        return Era.SEMESTER
    return Era.MONTHLY


def schema_for_year(year: int) -> SchemaVersion:
    """Archives up to 2006 use the old CSV layout."""

    return SchemaVersion.OLD if year <= MEFF_LAST_OLD_FORMAT_YEAR else SchemaVersion.NEW


def archive_name(year: int, month: int, category: Category) -> str:
    """Return the file name of the archive holding ``year``/``month``."""

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    era = era_for_year(year)
    yy = f"{year % 100:02d}"
    if era is Era.MONTHLY:
        return f"HP{yy}{month:02d}{category.monthly_suffix}.zip"
    if era is Era.YEARLY:
        return f"HP{yy}000{category.legacy_suffix}.zip"
    semester = "1s" if month <= 6 else "00"
    return f"HP{yy}{semester}0{category.legacy_suffix}.zip"


def resolve_url(
    year: int,
    month: int,
    category: Category = Category.PRIMARY,
    *,
    base_url: str = MEFF_BASE_URL,
) -> str:
    """Return the canonical download URL for a (year, month, category) triple."""

    return f"{base_url.rstrip('/')}/{archive_name(year, month, category)}"


__all__ = ["era_for_year", "schema_for_year", "archive_name", "resolve_url"]
