from __future__ import annotations

import io
import zipfile
from typing import Callable

import pytest


def _build_archive(*entries: str | bytes) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as bundle:
        for index, entry in enumerate(entries):
            payload = entry.encode("latin-1") if isinstance(entry, str) else entry
            bundle.writestr(f"entry_{index}.csv", payload)
    return buffer.getvalue()


class FakeSource:
    """In-memory archive source; unknown URLs answer with an empty archive."""

    def __init__(self) -> None:
        self.archives: dict[str, bytes] = {}
        self.requests: list[str] = []

    def add(self, url: str, *lines: str) -> None:
        self.archives[url] = _build_archive("".join(f"{line}\n" for line in lines))

    def fetch(self, url: str) -> bytes:
        self.requests.append(url)
        return self.archives.get(url, _build_archive(""))


@pytest.fixture()
def make_archive() -> Callable[..., bytes]:
    return _build_archive


@pytest.fixture()
def fake_source() -> FakeSource:
    return FakeSource()
