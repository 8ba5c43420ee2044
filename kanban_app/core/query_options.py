"""Validated, immutable query configuration for issue fetches."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def clamp_page_size(size: Any) -> int:
    """Normalize a raw page size into ``[1, MAX_PAGE_SIZE]``.

    ``None`` and unparseable strings fall back to the default. Out-of-range
    values are clamped silently; callers wanting a warning emit it themselves.
    """
    if size is None:
        return DEFAULT_PAGE_SIZE
    if isinstance(size, str):
        text = size.strip()
        try:
            size = int(text)
        except ValueError:
            return DEFAULT_PAGE_SIZE
    try:
        value = int(size)
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    return max(1, min(value, MAX_PAGE_SIZE))


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class QueryOptions:
    team_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    no_cache: bool = False
    include_archived: bool = False

    def __post_init__(self):
        object.__setattr__(self, "page_size", clamp_page_size(self.page_size))

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None = None) -> QueryOptions:
        raw = raw or {}
        return cls(
            team_id=_clean_str(raw.get("team_id")),
            start_date=_clean_str(raw.get("start_date")),
            end_date=_clean_str(raw.get("end_date")),
            page_size=clamp_page_size(raw.get("page_size")),
            no_cache=bool(raw.get("no_cache")),
            include_archived=bool(raw.get("include_archived")),
        )

    def cache_key_data(self) -> dict[str, Any]:
        """Fields that change upstream results; page size and flags like no_cache are excluded."""
        data = {
            "team_id": self.team_id,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "include_archived": self.include_archived,
        }
        return {k: v for k, v in data.items() if v is not None}

    def to_dict(self) -> dict[str, Any]:
        return {
            "team_id": self.team_id,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "page_size": self.page_size,
            "no_cache": self.no_cache,
            "include_archived": self.include_archived,
        }
