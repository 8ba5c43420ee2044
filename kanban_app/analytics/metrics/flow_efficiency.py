"""Flow efficiency: share of elapsed time spent in active states."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from kanban_app.core.config import ACTIVE_STATE_TYPES
from kanban_app.core.models import HistoryEvent, IssueModel

SECONDS_PER_DAY = 86400.0


def _is_active(event: HistoryEvent) -> bool:
    # Attribution uses the state the origin event moved into.
    return event.to_state is not None and event.to_state.type.value in ACTIVE_STATE_TYPES


def _duration_days(start: HistoryEvent, end: HistoryEvent) -> float:
    if start.timestamp is None or end.timestamp is None:
        return 0.0
    return (end.timestamp - start.timestamp).total_seconds() / SECONDS_PER_DAY


def active_and_total_time(history: Sequence[HistoryEvent]) -> tuple[float, float]:
    active_time = 0.0
    total_time = 0.0
    for current, following in zip(history, history[1:]):
        duration = _duration_days(current, following)
        total_time += duration
        if _is_active(current):
            active_time += duration
    return active_time, total_time


def issue_efficiency(issue: IssueModel) -> float:
    if not issue.history:
        return 0.0
    active_time, total_time = active_and_total_time(issue.history)
    if total_time == 0:
        return 0.0
    return active_time / total_time


class FlowEfficiencyCalculator:
    def __init__(self, issues: Iterable[IssueModel]):
        self.issues = list(issues)

    def calculate(self) -> float:
        """Mean per-issue efficiency as a percentage rounded to 2 decimals."""
        if not self.issues:
            return 0.0
        total = sum(issue_efficiency(issue) for issue in self.issues)
        return round(total / len(self.issues) * 100, 2)
