"""Linear client facade: cache lookup in front of the paginator."""

from __future__ import annotations

import logging
from typing import Any

from .cache import FileCacheStore, IssueCache
from .config import AppSettings
from .errors import ConfigurationError
from .paginator import Paginator, ProgressCallback, Transport
from .query_options import QueryOptions
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class LinearClient:
    def __init__(self, transport: Transport, cache: IssueCache, paginator: Paginator | None = None):
        self.transport = transport
        self.cache = cache
        self.paginator = paginator or Paginator(transport)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> LinearClient:
        if not settings.api_token:
            raise ConfigurationError(
                "LINEAR_API_TOKEN is not set; create a token at https://linear.app/settings/api"
            )
        transport = HttpTransport(settings.api_token, url=settings.api_url, timeout=settings.http_timeout)
        cache = IssueCache(FileCacheStore(settings.cache_dir), tz=settings.timezone)
        return cls(transport, cache)

    def fetch(
        self,
        options: QueryOptions,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[dict[str, Any]]:
        """Return raw issues for ``options``, from today's cache when possible."""
        if options.no_cache:
            logger.debug("Cache disabled, fetching from API")
            return self._fetch_fresh(options, progress)

        key = self.cache.key(options)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        logger.info("Cache miss or expired, fetching from API")
        issues = self._fetch_fresh(options, progress)
        self.cache.set(key, issues)
        return issues

    def _fetch_fresh(self, options: QueryOptions, progress: ProgressCallback | None) -> list[dict[str, Any]]:
        issues = self.paginator.fetch_all(options, progress=progress)
        logger.info("Fetched %s issues from Linear API", len(issues))
        return issues
