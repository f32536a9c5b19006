from __future__ import annotations

import pytest

from meff_history.exceptions import UnsupportedPeriod
from meff_history.ingestion.models import Category, Era, SchemaVersion
from meff_history.ingestion.urls import archive_name, era_for_year, resolve_url, schema_for_year

BASE = "http://www.meff.es/docs/Ficheros/Descarga/dRV/"


@pytest.mark.parametrize("year", [1900, 1980, 1992])
def test_years_before_1993_are_unsupported(year: int) -> None:
    with pytest.raises(UnsupportedPeriod):
        resolve_url(year, 1, Category.PRIMARY)


def test_unsupported_period_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="1993"):
        era_for_year(1992)


@pytest.mark.parametrize("year", [1993, 1994, 1995, 1996, 1997, 1999, 2000])
def test_yearly_archives_ignore_the_month(year: int) -> None:
    urls = {resolve_url(year, month, Category.PRIMARY) for month in range(1, 13)}

    assert len(urls) == 1
    assert urls.pop() == f"{BASE}HP{year % 100:02d}000a.zip"
    assert era_for_year(year) is Era.YEARLY


@pytest.mark.parametrize("year", [1998, 2001, 2002, 2003, 2004, 2005, 2006])
@pytest.mark.parametrize("category", list(Category))
def test_semester_archives_split_at_june(year: int, category: Category) -> None:
    first = {resolve_url(year, month, category) for month in range(1, 7)}
    second = {resolve_url(year, month, category) for month in range(7, 13)}

    assert len(first) == 1
    assert len(second) == 1
    assert first != second
    assert era_for_year(year) is Era.SEMESTER


def test_semester_archive_names() -> None:
    assert archive_name(1998, 3, Category.PRIMARY) == "HP981s0a.zip"
    assert archive_name(1998, 9, Category.PRIMARY) == "HP98000a.zip"
    assert archive_name(2005, 6, Category.ALTERNATE) == "HP051s0i.zip"
    assert archive_name(2005, 7, Category.ALTERNATE) == "HP05000i.zip"


def test_monthly_archives_are_distinct_per_month() -> None:
    urls = [resolve_url(2008, month, Category.PRIMARY) for month in range(1, 13)]

    assert len(set(urls)) == 12
    assert urls[0] == f"{BASE}HP0801ACO.zip"
    assert urls[11] == f"{BASE}HP0812ACO.zip"
    assert era_for_year(2007) is Era.MONTHLY


def test_category_suffix_changes_length_in_2007() -> None:
    assert resolve_url(2006, 1, Category.ALTERNATE).endswith("1s0i.zip")
    assert resolve_url(2007, 1, Category.ALTERNATE).endswith("0701FIE.zip")
    assert resolve_url(2010, 6, Category.PRIMARY).endswith("HP1006ACO.zip")


def test_two_digit_year_suffix_wraps_the_century() -> None:
    assert archive_name(2000, 1, Category.PRIMARY) == "HP00000a.zip"
    assert archive_name(2009, 2, Category.PRIMARY) == "HP0902ACO.zip"


def test_custom_base_url() -> None:
    url = resolve_url(2012, 4, Category.PRIMARY, base_url="https://mirror.example/meff")

    assert url == "https://mirror.example/meff/HP1204ACO.zip"


@pytest.mark.parametrize("month", [0, 13])
def test_invalid_month_is_rejected(month: int) -> None:
    with pytest.raises(ValueError):
        resolve_url(2010, month, Category.PRIMARY)


def test_schema_switches_after_2006() -> None:
    assert schema_for_year(1995) is SchemaVersion.OLD
    assert schema_for_year(2006) is SchemaVersion.OLD
    assert schema_for_year(2007) is SchemaVersion.NEW
