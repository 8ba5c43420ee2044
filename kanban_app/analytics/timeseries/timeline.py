"""Per-issue ordered event timelines (creation + status changes)."""

from __future__ import annotations

from kanban_app.core.config import CREATED_STATE_LABEL
from kanban_app.core.models import EventKind, IssueModel, TimelineEvent


def creation_event(issue: IssueModel) -> TimelineEvent | None:
    if issue.created_at is None:
        return None
    return TimelineEvent(
        timestamp=issue.created_at,
        from_state=None,
        to_state=CREATED_STATE_LABEL,
        kind=EventKind.CREATED,
    )


def history_events(issue: IssueModel) -> list[TimelineEvent]:
    events = []
    for entry in issue.history:
        if entry.to_state is None or entry.timestamp is None:
            continue
        events.append(
            TimelineEvent(
                timestamp=entry.timestamp,
                from_state=entry.from_state.name if entry.from_state else None,
                to_state=entry.to_state.name or entry.to_state.type.value,
                kind=EventKind.STATUS_CHANGE,
            )
        )
    return events


def build_timeline(issue: IssueModel) -> list[TimelineEvent]:
    """Creation event followed by status changes, oldest first.

    ``sorted`` is stable, so events sharing a timestamp keep their input order.
    """
    events = []
    created = creation_event(issue)
    if created is not None:
        events.append(created)
    events.extend(history_events(issue))
    return sorted(events, key=lambda event: event.timestamp)


class TimelineBuilder:
    def build_timeline(self, issue: IssueModel) -> list[TimelineEvent]:
        return build_timeline(issue)
