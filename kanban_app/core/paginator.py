"""Cursor-based pagination over the Linear ``issues`` connection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from . import parser
from .config import MAX_PAGES
from .parser import IssuesPage, PageInfo
from .query_builder import build_issues_query
from .query_options import QueryOptions

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


class Transport(Protocol):
    def post(self, payload: dict[str, Any]) -> Any: ...


@dataclass(frozen=True, slots=True)
class PageState:
    current_page: int = 1
    after_cursor: str | None = None
    has_next_page: bool = True

    def advance(self, page_info: PageInfo) -> PageState:
        return PageState(
            current_page=self.current_page + 1,
            after_cursor=page_info.end_cursor,
            has_next_page=page_info.has_next_page,
        )

    def limit_reached(self, max_pages: int) -> bool:
        return self.current_page > max_pages


def fold_page(
    state: PageState, issues: list[dict[str, Any]], page: IssuesPage
) -> tuple[PageState, list[dict[str, Any]]]:
    """Accumulate one parsed page into the running result."""
    return state.advance(page.page_info), issues + page.issues


class Paginator:
    def __init__(self, transport: Transport, *, max_pages: int = MAX_PAGES):
        self.transport = transport
        self.max_pages = max_pages

    def fetch_page(self, options: QueryOptions, after_cursor: str | None) -> IssuesPage | None:
        payload = build_issues_query(options, after_cursor)
        data = self.transport.post(payload)
        return parser.parse(data)

    def fetch_all(
        self,
        options: QueryOptions,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch every page until exhaustion or the page ceiling.

        Hitting the ceiling returns what was gathered so far. A page that
        fails to parse discards everything and returns an empty list. A page
        that claims more results without an end cursor ends the fetch.
        ``TransportError`` propagates unchanged.
        """
        state = PageState()
        issues: list[dict[str, Any]] = []
        while state.has_next_page:
            logger.debug("Fetching page %s (%s issues so far)", state.current_page, len(issues))
            if progress:
                progress(f"Fetching page {state.current_page}", state.current_page, None)
            page = self.fetch_page(options, state.after_cursor)
            if page is None:
                logger.error("Aborting fetch at page %s: response could not be parsed", state.current_page)
                return []
            state, issues = fold_page(state, issues, page)
            if state.limit_reached(self.max_pages):
                if state.has_next_page:
                    logger.info(
                        "Stopped after %s pages (%s issues); more results may exist",
                        self.max_pages,
                        len(issues),
                    )
                break
            if state.has_next_page and state.after_cursor is None:
                # Without a cursor the next request would return page 1 again.
                logger.warning(
                    "Page %s reported more results but no end cursor; stopping with %s issues",
                    state.current_page - 1,
                    len(issues),
                )
                break
        return issues
