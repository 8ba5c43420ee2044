"""HTTP transport for the Linear GraphQL endpoint."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import HTTP_TIMEOUT_SECONDS, LINEAR_API_URL
from .errors import TransportError

logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized - check your API token",
    403: "Forbidden - insufficient permissions",
    429: "Rate limited",
}


def _graphql_error_messages(data: Any) -> list[str]:
    if not isinstance(data, dict):
        return []
    errors = data.get("errors") or []
    if not isinstance(errors, list):
        return [str(errors)]
    return [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]


class HttpTransport:
    """Executes one GraphQL request/response cycle per call.

    No retries are attempted; any failure raises ``TransportError``.
    """

    def __init__(
        self,
        api_token: str,
        *,
        url: str = LINEAR_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": api_token,
                "Content-Type": "application/json",
            }
        )

    def post(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.Timeout as exc:
            raise TransportError(f"Network error: request timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise TransportError(f"Network error: {exc}") from exc

        if resp.status_code >= 400:
            detail = STATUS_MESSAGES.get(resp.status_code, resp.reason or "HTTP error")
            messages: list[str] = []
            if resp.status_code == 400:
                try:
                    messages = _graphql_error_messages(resp.json())
                except ValueError:
                    messages = []
            if messages:
                detail = f"{detail} - {', '.join(messages)}"
            logger.debug("Linear response body (%s): %s", resp.status_code, resp.text[:500])
            raise TransportError(f"HTTP {resp.status_code}: {detail}", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON response: {exc}", status_code=resp.status_code) from exc

        messages = _graphql_error_messages(data)
        if messages:
            raise TransportError(f"GraphQL errors: {', '.join(messages)}", status_code=resp.status_code)
        return data
