"""Exception hierarchy for the Linear fetch pipeline."""

from __future__ import annotations


class KanbanError(Exception):
    """Base exception for kanban metrics errors."""


class TransportError(KanbanError):
    """Raised when a request to the Linear API fails.

    Covers network errors, timeouts, non-2xx responses, undecodable bodies
    and GraphQL-level ``errors`` payloads.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseShapeError(KanbanError):
    """Raised when a response is missing the expected issues payload."""


class ConfigurationError(KanbanError):
    """Raised for missing credentials or a malformed settings file."""
