"""Central configuration, constants, and environment helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .query_options import QueryOptions

# =============================================================================
# Linear API Settings
# =============================================================================
LINEAR_API_URL = "https://api.linear.app/graphql"
API_TOKEN_ENV_KEY = "LINEAR_API_TOKEN"
HTTP_TIMEOUT_SECONDS: float = 30.0

# Linear rejects page sizes above 250.
MAX_PAGE_SIZE: int = 250
DEFAULT_PAGE_SIZE: int = MAX_PAGE_SIZE

# Pagination stops after this many pages even if the API reports more.
MAX_PAGES: int = 100

# Number of history entries requested per issue.
HISTORY_PAGE_SIZE: int = 50

# =============================================================================
# Cache Settings
# =============================================================================
DEFAULT_CACHE_DIR = "tmp/.linear_cache"
CACHE_ENV_KEYS: tuple[str, ...] = ("KANBAN_ENV", "APP_ENV")
KNOWN_ENVIRONMENTS: frozenset[str] = frozenset({"test", "development", "production"})

# Calendar-day cache expiry is evaluated in this timezone.
TIMEZONE = "UTC"

# =============================================================================
# Workflow State Configuration
# =============================================================================
# State types that count as "active" time for flow efficiency
ACTIVE_STATE_TYPES: frozenset[str] = frozenset({"started", "unstarted"})

# State types that land in the backlog bucket
BACKLOG_STATE_TYPES: frozenset[str] = frozenset({"backlog", "unstarted"})

DEFAULT_TEAM_NAME = "Unknown Team"
CREATED_STATE_LABEL = "created"
TRANSITION_SEPARATOR = " → "

PERCENTILE_P95 = 95


# =============================================================================
# Environment Helpers
# =============================================================================
def get_api_token(env: Mapping[str, str] | None = None) -> str:
    """Return the Linear API token from the environment ('' when unset)."""
    source = os.environ if env is None else env
    return (source.get(API_TOKEN_ENV_KEY) or "").strip()


def current_environment(env: Mapping[str, str] | None = None) -> str:
    source = os.environ if env is None else env
    for key in CACHE_ENV_KEYS:
        value = source.get(key)
        if value:
            return value.strip().lower()
    return "development"


def cache_dir_for_environment(env: Mapping[str, str] | None = None) -> str:
    """Pick a cache directory for the running environment.

    Known environments (test, development, production) get their own
    directory so test runs never read development data. Anything else
    falls back to ``DEFAULT_CACHE_DIR``.
    """
    name = current_environment(env)
    if name in KNOWN_ENVIRONMENTS:
        return f"{DEFAULT_CACHE_DIR}_{name}"
    return DEFAULT_CACHE_DIR


@dataclass(slots=True)
class AppSettings:
    api_token: str = ""
    api_url: str = LINEAR_API_URL
    http_timeout: float = HTTP_TIMEOUT_SECONDS
    team_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    cache_dir: str = DEFAULT_CACHE_DIR
    timezone: str = TIMEZONE

    def query_options(self, **overrides) -> QueryOptions:
        """Build QueryOptions using configured filter defaults.

        Explicit overrides win; a ``None`` override falls back to the
        configured default, mirroring how CLI flags fall back to env values.
        """
        from .query_options import QueryOptions

        raw = {
            "team_id": self.team_id,
            "start_date": self.start_date,
            "end_date": self.end_date,
        }
        for key, value in overrides.items():
            if value is not None or key not in raw:
                raw[key] = value
        return QueryOptions.from_raw(raw)
