"""Split issues into completed / in-progress / backlog buckets by state type."""

from __future__ import annotations

from collections.abc import Iterable

from kanban_app.core.config import BACKLOG_STATE_TYPES
from kanban_app.core.models import IssueModel, StateType

COMPLETED = "completed"
IN_PROGRESS = "in_progress"
BACKLOG = "backlog"

STATE_BUCKETS: dict[StateType, str] = {
    StateType.COMPLETED: COMPLETED,
    StateType.STARTED: IN_PROGRESS,
    **{StateType(value): BACKLOG for value in sorted(BACKLOG_STATE_TYPES)},
}


def bucket_for(issue: IssueModel) -> str | None:
    """Bucket name for an issue, or None when its state type is excluded.

    Canceled and unclassified issues belong to no bucket.
    """
    return STATE_BUCKETS.get(issue.state_type)


def partition_issues(
    issues: Iterable[IssueModel],
) -> tuple[list[IssueModel], list[IssueModel], list[IssueModel]]:
    buckets: dict[str, list[IssueModel]] = {COMPLETED: [], IN_PROGRESS: [], BACKLOG: []}
    for issue in issues:
        name = bucket_for(issue)
        if name is None:
            continue
        buckets[name].append(issue)
    return buckets[COMPLETED], buckets[IN_PROGRESS], buckets[BACKLOG]


def partition_counts(issues: Iterable[IssueModel]) -> dict[str, int]:
    counts = {COMPLETED: 0, IN_PROGRESS: 0, BACKLOG: 0, "excluded": 0}
    for issue in issues:
        counts[bucket_for(issue) or "excluded"] += 1
    return counts
