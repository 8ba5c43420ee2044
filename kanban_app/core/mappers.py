"""Mapping raw Linear issue JSON into IssueModel instances."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd

from .config import DEFAULT_TEAM_NAME
from .models import HistoryEvent, IssueModel, StateType, WorkflowState

logger = logging.getLogger(__name__)


def parse_dt(val: Any) -> datetime | None:
    """Parse an ISO timestamp into a UTC-aware datetime (None when invalid)."""
    if val is None or val == "":
        return None
    if isinstance(val, datetime) and val.tzinfo is not None:
        return val
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        logger.warning("Could not parse timestamp %r", val)
        return None
    return ts.to_pydatetime()


def _map_state(node: Any) -> WorkflowState | None:
    if not isinstance(node, dict):
        return None
    return WorkflowState(name=node.get("name"), type=StateType.from_raw(node.get("type")))


def _history_nodes(raw: dict[str, Any]) -> list[dict[str, Any]]:
    history = raw.get("history")
    if isinstance(history, dict):
        nodes = history.get("nodes") or []
    elif isinstance(history, list):
        nodes = history
    else:
        nodes = []
    return [n for n in nodes if isinstance(n, dict)]


def _to_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def map_issue(raw: dict[str, Any]) -> IssueModel:
    team = raw.get("team") or {}
    assignee = raw.get("assignee") or {}
    history = [
        HistoryEvent(
            timestamp=parse_dt(node.get("createdAt")),
            from_state=_map_state(node.get("fromState")),
            to_state=_map_state(node.get("toState")),
        )
        for node in _history_nodes(raw)
    ]
    return IssueModel(
        id=raw.get("id"),
        identifier=raw.get("identifier"),
        title=raw.get("title"),
        state=_map_state(raw.get("state")) or WorkflowState(name=None),
        team_id=team.get("id"),
        team_name=team.get("name"),
        assignee_name=assignee.get("name"),
        priority=_to_int(raw.get("priority")),
        estimate=_to_float(raw.get("estimate")),
        created_at=parse_dt(raw.get("createdAt")),
        updated_at=parse_dt(raw.get("updatedAt")),
        started_at=parse_dt(raw.get("startedAt")),
        completed_at=parse_dt(raw.get("completedAt")),
        archived_at=parse_dt(raw.get("archivedAt")),
        history=history,
        raw=raw,
    )


def map_issues(raw_issues: Iterable[dict[str, Any] | IssueModel]) -> list[IssueModel]:
    """Map raw issues, passing through anything already mapped."""
    return [r if isinstance(r, IssueModel) else map_issue(r) for r in raw_issues]


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "id": i.id,
                "identifier": i.identifier,
                "title": i.title,
                "state": i.state.name,
                "state_type": i.state_type.value,
                "team": i.team_name or DEFAULT_TEAM_NAME,
                "assignee": i.assignee_name or "Unassigned",
                "priority": i.priority,
                "estimate": i.estimate,
                "created_at": i.created_at,
                "updated_at": i.updated_at,
                "started_at": i.work_started_at,
                "completed_at": i.completed_at,
                "archived_at": i.archived_at,
                "history_events": len(i.history),
            }
        )
    df = pd.DataFrame(rows)
    for col in ("created_at", "updated_at", "started_at", "completed_at", "archived_at"):
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], utc=True, errors="coerce")
    return df
