"""CSV helpers for storing and re-reading gathered MEFF quotes."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import IO, Iterable, Sequence

from meff_history.ingestion.models import QUOTE_COLUMNS, QuoteRecord

_DATE_COLUMNS = {"session_date", "expiration_date"}
_TEXT_COLUMNS = {"contract_code", "cfi_code"}


class QuoteCSVExporter:
    """Export quote records into a flat CSV file (one row per record)."""

    def write(self, records: Sequence[QuoteRecord], *, output: str | Path | IO[str]) -> Path | None:
        """Write ``records`` to ``output``.

        ``output`` may be a path (parent folders are created and the path is
        returned) or an already open text stream.
        """

        if isinstance(output, (str, Path)):
            path = Path(output)
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", newline="", encoding="utf-8") as handle:
                self._write_rows(records, handle)
            return path
        self._write_rows(records, output)
        return None

    @staticmethod
    def _write_rows(records: Iterable[QuoteRecord], handle: IO[str]) -> None:
        writer = csv.writer(handle)
        writer.writerow(QUOTE_COLUMNS)
        for record in records:
            row: list[str] = []
            for column in QUOTE_COLUMNS:
                value = getattr(record, column)
                if value is None:
                    row.append("")
                elif isinstance(value, date):
                    row.append(value.isoformat())
                else:
                    row.append(f"{value}")
            writer.writerow(row)


class QuoteCSVParser:
    """Parse CSV files produced by :class:`QuoteCSVExporter`."""

    def parse(self, csv_path: str | Path) -> list[QuoteRecord]:
        """Rebuild the records written to ``csv_path``.

        The export only keeps the named columns, so the raw archive fields are
        gone: parsed records have empty ``fields``, a ``field_count`` of 0 and
        no detectable ``schema``. They still compare equal to the originals.
        """

        path = Path(csv_path)
        if not path.exists():
            raise FileNotFoundError(path)

        with path.open("r", newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            self._validate_header(reader.fieldnames)
            records: list[QuoteRecord] = []
            for row in reader:
                values: dict[str, object] = {}
                for column in QUOTE_COLUMNS:
                    raw = (row.get(column) or "").strip()
                    if column in _TEXT_COLUMNS:
                        values[column] = raw
                    elif not raw:
                        values[column] = None
                    elif column in _DATE_COLUMNS:
                        values[column] = date.fromisoformat(raw)
                    else:
                        values[column] = float(raw)
                records.append(QuoteRecord(**values))  # type: ignore[arg-type]
        return records

    @staticmethod
    def _validate_header(fieldnames: Iterable[str] | None) -> None:
        if not fieldnames:
            raise ValueError("CSV file does not contain a header row")
        normalized = [field.strip() for field in fieldnames]
        if normalized[: len(QUOTE_COLUMNS)] != list(QUOTE_COLUMNS):
            raise ValueError("Unexpected CSV header format")


__all__ = ["QuoteCSVExporter", "QuoteCSVParser"]
