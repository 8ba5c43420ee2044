"""Calendar-day cache for fetched issue lists.

Entries are keyed by a hash of the query fields that influence upstream
results and expire at the first calendar-day boundary after they were
written, not after a rolling duration.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import pytz

from .config import TIMEZONE
from .query_options import QueryOptions

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CacheStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, text: str) -> None: ...

    def clear(self) -> None: ...


class FileCacheStore:
    """One ``<key>.json`` file per entry inside ``directory``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(text, encoding="utf-8")

    def clear(self) -> None:
        if not self.directory.exists():
            return
        for path in self.directory.glob("*.json"):
            path.unlink(missing_ok=True)


class MemoryCacheStore:
    def __init__(self):
        self.entries: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self.entries.get(key)

    def write(self, key: str, text: str) -> None:
        self.entries[key] = text

    def clear(self) -> None:
        self.entries.clear()


def cache_key(options: QueryOptions) -> str:
    payload = options.cache_key_data()
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


class IssueCache:
    def __init__(self, store: CacheStore, *, tz: str = TIMEZONE, clock: Clock | None = None):
        self.store = store
        self._tz = pytz.timezone(tz)
        self._clock = clock or (lambda: datetime.now(tz=pytz.UTC))

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = pytz.UTC.localize(now)
        return now.astimezone(self._tz)

    def key(self, options: QueryOptions) -> str:
        return cache_key(options)

    def get(self, key: str) -> list[dict[str, Any]] | None:
        """Return cached issues written today, or None for any kind of miss."""
        try:
            text = self.store.read(key)
        except UnicodeDecodeError as exc:
            logger.warning("Discarding corrupt cache entry %s: %s", key[:8], exc)
            return None
        except OSError as exc:
            logger.warning("Cache read failed for %s: %s", key[:8], exc)
            return None
        if text is None:
            return None
        try:
            entry = json.loads(text)
            issues = entry["issues"]
            fetched_at = datetime.fromisoformat(entry["fetched_at"])
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Discarding corrupt cache entry %s: %s", key[:8], exc)
            return None
        if not isinstance(issues, list):
            logger.warning("Discarding corrupt cache entry %s: issues is not a list", key[:8])
            return None
        if fetched_at.tzinfo is None:
            fetched_at = pytz.UTC.localize(fetched_at)
        if fetched_at.astimezone(self._tz).date() != self._now().date():
            logger.debug("Cache entry %s expired (fetched %s)", key[:8], fetched_at.isoformat())
            return None
        logger.info("Using cached data (%s issues) - cache key: %s...", len(issues), key[:8])
        return issues

    def set(self, key: str, issues: list[dict[str, Any]]) -> None:
        entry = {"issues": list(issues), "fetched_at": self._now().isoformat()}
        try:
            self.store.write(key, json.dumps(entry, indent=2))
        except (OSError, TypeError) as exc:
            logger.warning("Cache write failed for %s: %s", key[:8], exc)
            return
        logger.debug("Saved %s issues to cache %s", len(issues), key[:8])

    def clear(self) -> None:
        self.store.clear()
