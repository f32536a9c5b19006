"""Utility helpers for planning MEFF archive requests over date ranges."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Tuple

from meff_history.ingestion.models import Era
from meff_history.ingestion.urls import era_for_year


@dataclass(frozen=True)
class DateRange:
    """Container representing a closed date range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("start date must not be after end date")

    def as_tuple(self) -> Tuple[date, date]:
        """Return the range as a tuple of ``(start, end)``."""
        return (self.start, self.end)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end


def parse_date(value: str | date) -> date:
    """Parse a date string in ISO format to :class:`date`."""

    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def month_window(year: int, window: DateRange) -> Tuple[int, int]:
    """Return the first and last month of ``year`` covered by ``window``."""

    start_month = window.start.month if year == window.start.year else 1
    end_month = window.end.month if year == window.end.year else 12
    return start_month, end_month


def period_months(year: int, window: DateRange) -> list[int]:
    """Return one representative month per archive needed for ``year``.

    Yearly archives need a single request (month 1), semester archives one
    request per half-year touched by the window and monthly archives one
    request per month.
    """

    start_month, end_month = month_window(year, window)
    era = era_for_year(year)
    if era is Era.YEARLY:
        return [1]
    if era is Era.SEMESTER:
        first_half = [1] if start_month <= 6 else []
        second_half = [7] if end_month >= 7 else []
        return first_half + second_half
    return list(range(start_month, end_month + 1))


def previous_month(today: date) -> Tuple[int, int]:
    """Return ``(year, month)`` of the calendar month before ``today``."""

    last_day = today.replace(day=1) - timedelta(days=1)
    return last_day.year, last_day.month
