from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from meff_history.ingestion import archive
from meff_history.ingestion.models import LAYOUTS, Category, QuoteRecord, SchemaVersion


def test_category_suffixes() -> None:
    assert Category.PRIMARY.legacy_suffix == "a"
    assert Category.ALTERNATE.legacy_suffix == "i"
    assert Category.PRIMARY.monthly_suffix == "ACO"
    assert Category.ALTERNATE.monthly_suffix == "FIE"


def test_quote_record_is_immutable() -> None:
    quote = QuoteRecord(session_date=date(2008, 1, 2), contract_code="XYZ", cfi_code="ESXXXX")

    with pytest.raises(FrozenInstanceError):
        quote.close = 1.0  # type: ignore[misc]


def test_records_without_raw_fields_have_no_schema() -> None:
    quote = QuoteRecord(session_date=date(2008, 1, 2), contract_code="XYZ", cfi_code="OPEXXX")

    assert quote.field_count == 0
    assert quote.schema is None
    assert quote.is_option()


def test_schema_is_detected_from_the_layout_width() -> None:
    assert archive.LAYOUTS is LAYOUTS
    for version, layout in LAYOUTS.items():
        quote = QuoteRecord(
            session_date=date(2008, 1, 2),
            contract_code="XYZ",
            cfi_code="ESXXXX",
            fields=("",) * len(layout),
        )
        assert quote.schema is version
    assert len(LAYOUTS[SchemaVersion.OLD]) == 10
    assert len(LAYOUTS[SchemaVersion.NEW]) == 14
