"""Extract issues and pagination info from a decoded GraphQL response."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .errors import ResponseShapeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PageInfo:
    has_next_page: bool = False
    end_cursor: str | None = None


@dataclass(frozen=True, slots=True)
class IssuesPage:
    issues: list[dict[str, Any]] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)


def normalize_page_info(page_info: Any) -> PageInfo:
    if not isinstance(page_info, dict):
        return PageInfo()
    cursor = page_info.get("endCursor")
    return PageInfo(
        has_next_page=bool(page_info.get("hasNextPage") or False),
        end_cursor=str(cursor) if cursor else None,
    )


def parse_strict(data: Any) -> IssuesPage:
    """Validate ``data`` and return its issues page, raising on a bad shape."""
    if not isinstance(data, dict):
        raise ResponseShapeError(f"Expected a JSON object, got {type(data).__name__}")
    errors = data.get("errors")
    if errors:
        raise ResponseShapeError(f"GraphQL errors present: {errors}")
    body = data.get("data")
    if not isinstance(body, dict):
        raise ResponseShapeError("Response has no 'data' object")
    issues_data = body.get("issues")
    if not isinstance(issues_data, dict):
        raise ResponseShapeError("Response has no 'data.issues' object")
    nodes = issues_data.get("nodes") or []
    if not isinstance(nodes, list):
        raise ResponseShapeError("'data.issues.nodes' is not a list")
    return IssuesPage(
        issues=[n for n in nodes if isinstance(n, dict)],
        page_info=normalize_page_info(issues_data.get("pageInfo")),
    )


def parse(data: Any) -> IssuesPage | None:
    """Non-raising variant of ``parse_strict``: None signals a parse failure."""
    try:
        return parse_strict(data)
    except ResponseShapeError as exc:
        logger.error("Unexpected Linear response: %s", exc)
        return None
