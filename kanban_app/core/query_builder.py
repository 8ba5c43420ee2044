"""GraphQL payload construction for the Linear ``issues`` query."""

from __future__ import annotations

import logging
import re
from typing import Any

from .config import HISTORY_PAGE_SIZE
from .query_options import QueryOptions

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

ISSUES_QUERY = f"""
query Issues($filter: IssueFilter, $first: Int!, $after: String, $includeArchived: Boolean) {{
  issues(filter: $filter, first: $first, after: $after, includeArchived: $includeArchived) {{
    pageInfo {{ hasNextPage endCursor }}
    nodes {{
      id identifier title
      state {{ id name type }}
      team {{ id name key }}
      assignee {{ id name }}
      priority estimate createdAt updatedAt completedAt startedAt archivedAt
      history(first: {HISTORY_PAGE_SIZE}) {{
        nodes {{
          id createdAt
          fromState {{ id name type }}
          toState {{ id name type }}
        }}
      }}
    }}
  }}
}}
""".strip()


def team_filter(team_identifier: str) -> dict[str, Any]:
    """Filter by team UUID when the identifier looks like one, else by team key."""
    if UUID_PATTERN.match(team_identifier):
        return {"team": {"id": {"eq": team_identifier}}}
    return {"team": {"key": {"eq": team_identifier}}}


def date_filter(start_date: str | None, end_date: str | None) -> dict[str, Any]:
    """Inclusive ``updatedAt`` window covering whole UTC days."""
    bounds: dict[str, str] = {}
    if start_date:
        bounds["gte"] = f"{start_date}T00:00:00.000Z"
    if end_date:
        bounds["lte"] = f"{end_date}T23:59:59.999Z"
    if not bounds:
        return {}
    return {"updatedAt": bounds}


def build_filter(options: QueryOptions) -> dict[str, Any]:
    clause: dict[str, Any] = {}
    if options.team_id:
        clause.update(team_filter(options.team_id))
    clause.update(date_filter(options.start_date, options.end_date))
    return clause


def build_issues_query(options: QueryOptions, after_cursor: str | None = None) -> dict[str, Any]:
    """Return the request payload for one page of issues.

    The result depends only on ``options`` and ``after_cursor``.
    """
    variables: dict[str, Any] = {"first": options.page_size}
    clause = build_filter(options)
    if clause:
        variables["filter"] = clause
    if after_cursor:
        variables["after"] = after_cursor
    if options.include_archived:
        variables["includeArchived"] = True
    logger.debug("Issues query variables: %s", variables)
    return {"query": ISSUES_QUERY, "variables": variables}
