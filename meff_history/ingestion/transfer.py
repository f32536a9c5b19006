"""Two-tier download cache for MEFF archives (memory + disk)."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Protocol

import requests

from meff_history.exceptions import TransferError
from meff_history.utils.logger import get_logger
from meff_history.utils.meff import DEFAULT_TIMEOUT
from meff_history.utils.settings import default_cache_dir

LOGGER = get_logger(__name__)

USER_AGENT = "meff-history/0.1"


class ArchiveSource(Protocol):
    """Contract for anything able to return the raw bytes behind a URL."""

    def fetch(self, url: str) -> bytes:
        ...  # pragma: no cover - protocol definition


class TransferCache:
    """Download archives over HTTP and remember them in memory and on disk.

    Repeated requests for a URL inside one process are served from memory.
    Across processes the file kept under ``cache_dir`` is reused whenever it
    is newer than the ``Last-Modified`` reported by the server.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir else default_cache_dir()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self._memory: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def __contains__(self, url: object) -> bool:
        return url in self._memory

    def clear(self) -> None:
        """Forget every archive held in memory; disk files are kept."""

        with self._lock:
            self._memory.clear()

    def cache_path(self, url: str) -> Path:
        """Return the disk location used for ``url``, creating the folder."""

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return self.cache_dir / url.rsplit("/", 1)[-1]

    def fetch(self, url: str) -> bytes:
        with self._lock:
            LOGGER.info("request: %s", url)
            cached = self._memory.get(url)
            if cached is not None:
                LOGGER.debug("%s was found in memory cache", url)
                return cached

            response = self._download(url)
            payload = response.content
            path = self.cache_path(url)
            if path.exists() and self._disk_is_newer(path, response):
                LOGGER.debug("%s was found in disk cache", url)
                payload = path.read_bytes()
            else:
                path.write_bytes(payload)
                LOGGER.debug("Saved %s → %s", url, path)

            self._memory[url] = payload
            return payload

    def _download(self, url: str) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransferError(
                f"There was an error while attempting to contact MEFF servers: {exc}",
                url=url,
            ) from exc
        if response.status_code != 200:
            raise TransferError(
                "There was an error while attempting to contact MEFF servers: "
                f"Server error (HTTP {response.status_code}: {response.reason}).",
                url=url,
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _disk_is_newer(path: Path, response: requests.Response) -> bool:
        remote = _parse_last_modified(response.headers.get("Last-Modified"))
        if remote is None:
            return False
        local = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
        return local > remote


def _parse_last_modified(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = ["ArchiveSource", "TransferCache", "USER_AGENT"]
