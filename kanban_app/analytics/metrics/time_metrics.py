"""Cycle time and lead time statistics.

All durations are fractional days. Statistics follow nearest-rank
conventions on a zero-based sorted sample:

- average: arithmetic mean
- median: middle element, or mean of the two middle elements
- p95: element at ``round(0.95 * (n - 1))``, halves rounded up

Every statistic is rounded to two decimals and is 0 for an empty sample.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from datetime import datetime

from kanban_app.core.config import PERCENTILE_P95
from kanban_app.core.models import IssueModel, TimeStats

SECONDS_PER_DAY = 86400.0


def days_between(start: datetime | None, end: datetime | None) -> float | None:
    """Fractional days from ``start`` to ``end``; None if either is missing or end precedes start."""
    if start is None or end is None:
        return None
    if end < start:
        return None
    return round((end - start).total_seconds() / SECONDS_PER_DAY, 2)


def cycle_time_days(issue: IssueModel) -> float | None:
    return days_between(issue.work_started_at, issue.completed_at)


def lead_time_days(issue: IssueModel) -> float | None:
    return days_between(issue.created_at, issue.completed_at)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def median(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return round(ordered[mid], 2)
    return round((ordered[mid - 1] + ordered[mid]) / 2.0, 2)


def percentile(values: Sequence[float], pct: float) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    idx = round_half_up(pct / 100.0 * (len(ordered) - 1))
    return round(ordered[idx], 2)


def build_time_stats(values: Sequence[float]) -> TimeStats:
    return TimeStats(
        average=average(values),
        median=median(values),
        p95=percentile(values, PERCENTILE_P95),
    )


class TimeMetricsCalculator:
    def __init__(self, issues: Iterable[IssueModel]):
        self.issues = list(issues)

    def cycle_times(self) -> list[float]:
        return [d for d in (cycle_time_days(i) for i in self.issues) if d is not None]

    def lead_times(self) -> list[float]:
        return [d for d in (lead_time_days(i) for i in self.issues) if d is not None]

    def cycle_time_stats(self) -> TimeStats:
        return build_time_stats(self.cycle_times())

    def lead_time_stats(self) -> TimeStats:
        return build_time_stats(self.lead_times())
