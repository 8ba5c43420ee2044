"""Weekly throughput of completed issues."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from kanban_app.core.models import IssueModel, ThroughputStats

logger = logging.getLogger(__name__)


class ThroughputCalculator:
    """Completions per ISO week.

    Only weeks with at least one completion enter the average, so idle
    weeks do not pull ``weekly_avg`` down.
    """

    def __init__(self, completed_issues: Iterable[IssueModel]):
        self.completed_issues = list(completed_issues)

    def _completion_times(self) -> pd.Series:
        stamps = []
        for issue in self.completed_issues:
            if issue.completed_at is None:
                logger.warning("Missing completion date for issue %s", issue.identifier or issue.id)
                continue
            stamps.append(issue.completed_at)
        return pd.to_datetime(pd.Series(stamps, dtype=object), utc=True, errors="coerce").dropna()

    def _week_counts(self) -> pd.Series:
        completed = self._completion_times()
        if completed.empty:
            return pd.Series(dtype="int64")
        iso = completed.dt.isocalendar()
        return iso.groupby(["year", "week"]).size().sort_index()

    def weekly_counts(self) -> dict[str, int]:
        """Completions keyed by ISO week label, e.g. ``2024-W07``."""
        return {f"{int(year)}-W{int(week):02d}": int(count) for (year, week), count in self._week_counts().items()}

    def stats(self) -> ThroughputStats:
        total = len(self.completed_issues)
        if total == 0:
            return ThroughputStats()
        counts = self._week_counts()
        weekly_avg = round(float(counts.mean()), 2) if not counts.empty else 0.0
        return ThroughputStats(weekly_avg=weekly_avg, total_completed=total)
