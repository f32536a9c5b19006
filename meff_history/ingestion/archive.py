"""Stream quote records out of MEFF ZIP archives.

Archives hold one or more ``;``-separated text entries. Entries are read in
fixed-size chunks and lines are reassembled across chunk boundaries, so a
full entry is never decoded in one go.
"""

from __future__ import annotations

import io
import zipfile
import zlib
from datetime import date, datetime
from typing import IO, Iterator

from meff_history.exceptions import MalformedArchive, MalformedRecord
from meff_history.ingestion.models import LAYOUTS, QuoteRecord, SchemaVersion

CHUNK_SIZE = 4096
FIELD_SEPARATOR = ";"
ENCODING = "latin-1"

DATE_FORMATS: dict[SchemaVersion, str] = {
    SchemaVersion.OLD: "%d/%m/%Y",
    SchemaVersion.NEW: "%Y%m%d",
}

_DATE_FIELDS = {"session_date", "expiration_date"}
_TEXT_FIELDS = {"contract_code", "cfi_code"}


def parse_quote(line: str, schema: SchemaVersion) -> QuoteRecord:
    """Build a :class:`QuoteRecord` from one CSV line of ``schema``."""

    fields = tuple(line.split(FIELD_SEPARATOR))
    layout = LAYOUTS[schema]
    if len(fields) != len(layout):
        raise MalformedRecord(
            f"Expected {len(layout)} fields for the {schema.value} layout, found {len(fields)}",
            line=line,
        )

    values: dict[str, object] = {}
    for name, raw in zip(layout, fields):
        cleaned = raw.strip()
        if name in _TEXT_FIELDS:
            values[name] = cleaned
        elif name in _DATE_FIELDS:
            values[name] = _parse_date(cleaned, schema, line, required=name == "session_date")
        else:
            values[name] = _parse_number(cleaned, schema, line)
    if not values["contract_code"]:
        raise MalformedRecord("Missing contract code", line=line)
    return QuoteRecord(fields=fields, **values)  # type: ignore[arg-type]


def _parse_date(value: str, schema: SchemaVersion, line: str, *, required: bool) -> date | None:
    if not value:
        if required:
            raise MalformedRecord("Missing session date", line=line)
        return None
    try:
        return datetime.strptime(value, DATE_FORMATS[schema]).date()
    except ValueError as exc:
        raise MalformedRecord(f"Invalid date {value!r}", line=line) from exc


def _parse_number(value: str, schema: SchemaVersion, line: str) -> float | None:
    if not value:
        return None
    if schema is SchemaVersion.OLD:
        # Old files always use the Spanish notation: ``.`` groups thousands
        # and ``,`` marks decimals, so ``1.500`` is fifteen hundred.
        value = value.replace(".", "").replace(",", ".")
    try:
        return float(value)
    except ValueError as exc:
        raise MalformedRecord(f"Invalid number {value!r}", line=line) from exc


def _iter_entry_lines(handle: IO[bytes], chunk_size: int) -> Iterator[str]:
    buffer = bytearray()
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            break
        buffer += chunk
        cursor = 0
        while True:
            newline = buffer.find(b"\n", cursor)
            if newline < 0:
                break
            if newline > cursor:
                end = newline - 1 if buffer[newline - 1] == 0x0D else newline
                yield buffer[cursor:end].decode(ENCODING)
            cursor = newline + 1
        del buffer[:cursor]
    # Whatever is left has no terminating newline and is dropped.


def iter_archive_lines(archive: bytes, *, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Yield every newline-terminated line of every entry in ``archive``."""

    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    try:
        bundle = zipfile.ZipFile(io.BytesIO(archive))
    except zipfile.BadZipFile as exc:
        raise MalformedArchive("Downloaded data is not a valid ZIP archive") from exc
    with bundle:
        for info in bundle.infolist():
            if info.is_dir():
                continue
            try:
                with bundle.open(info) as handle:
                    yield from _iter_entry_lines(handle, chunk_size)
            except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
                raise MalformedArchive(f"Corrupt archive entry {info.filename!r}") from exc


def iter_quotes(
    archive: bytes,
    schema: SchemaVersion,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[QuoteRecord]:
    """Lazily parse every record of ``archive`` using ``schema``."""

    for line in iter_archive_lines(archive, chunk_size=chunk_size):
        yield parse_quote(line, schema)


__all__ = [
    "CHUNK_SIZE",
    "FIELD_SEPARATOR",
    "LAYOUTS",
    "DATE_FORMATS",
    "parse_quote",
    "iter_archive_lines",
    "iter_quotes",
]
