"""Exception hierarchy raised by the meff_history package."""

from __future__ import annotations


class MeffHistoryError(Exception):
    """Base class for every error raised while retrieving MEFF history."""


class UnsupportedPeriod(MeffHistoryError, ValueError):
    """Raised when a period predates the data published by MEFF."""

    def __init__(self, year: int, message: str | None = None) -> None:
        self.year = year
        super().__init__(message or f"MEFF data is only available from year 1993 (requested {year}).")


class TransferError(MeffHistoryError, RuntimeError):
    """Raised when an archive cannot be downloaded from the MEFF servers."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class MalformedRecord(MeffHistoryError, ValueError):
    """Raised when a CSV line does not match the layout of its schema."""

    def __init__(self, message: str, *, line: str) -> None:
        self.line = line
        super().__init__(f"{message}: {line!r}")


class MalformedArchive(MeffHistoryError, ValueError):
    """Raised when downloaded bytes are not a readable ZIP archive."""


__all__ = [
    "MeffHistoryError",
    "UnsupportedPeriod",
    "TransferError",
    "MalformedRecord",
    "MalformedArchive",
]
