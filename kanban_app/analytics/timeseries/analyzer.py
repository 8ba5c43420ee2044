"""Cross-issue status transition analysis.

Builds on per-issue timelines to answer three questions:

- which transitions happen most often (``status_flow_analysis``)
- how long issues sit in each status before leaving (``average_time_in_status``)
- how many events land in each status per day (``daily_status_counts``)
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable
from typing import Any

import pandas as pd

from kanban_app.core.config import TRANSITION_SEPARATOR
from kanban_app.core.models import IssueModel, TimelineEvent

from .timeline import TimelineBuilder

SECONDS_PER_DAY = 86400.0


def transition_label(origin: TimelineEvent, destination: TimelineEvent) -> str:
    return f"{origin.to_state}{TRANSITION_SEPARATOR}{destination.to_state}"


class TimeseriesAnalyzer:
    def __init__(self, issues: Iterable[IssueModel], timeline_builder: TimelineBuilder | None = None):
        self.issues = list(issues)
        self.timeline_builder = timeline_builder or TimelineBuilder()

    def _timelines(self) -> list[tuple[IssueModel, list[TimelineEvent]]]:
        return [(issue, self.timeline_builder.build_timeline(issue)) for issue in self.issues]

    def status_flow_analysis(self) -> dict[str, int]:
        """Transition counts, most frequent first (ties keep first-seen order)."""
        transitions: Counter[str] = Counter()
        for _issue, timeline in self._timelines():
            for origin, destination in zip(timeline, timeline[1:]):
                transitions[transition_label(origin, destination)] += 1
        return dict(transitions.most_common())

    def average_time_in_status(self) -> dict[str, float]:
        """Mean days spent in a status, attributed to the status being left."""
        durations: defaultdict[str, list[float]] = defaultdict(list)
        for _issue, timeline in self._timelines():
            for current, following in zip(timeline, timeline[1:]):
                # Fractional days, not whole calendar-date differences.
                elapsed = (following.timestamp - current.timestamp).total_seconds() / SECONDS_PER_DAY
                durations[current.to_state].append(elapsed)
        return {status: round(sum(values) / len(values), 2) for status, values in durations.items() if values}

    def daily_status_counts(self) -> dict[str, dict[str, int]]:
        """Event counts per UTC calendar day and target status, days ascending."""
        records = [
            {"date": event.timestamp.date().isoformat(), "status": event.to_state}
            for _issue, timeline in self._timelines()
            for event in timeline
        ]
        if not records:
            return {}
        frame = pd.DataFrame(records)
        grouped = frame.groupby(["date", "status"], sort=True).size()
        out: dict[str, dict[str, int]] = {}
        for (day, status), count in grouped.items():
            out.setdefault(day, {})[status] = int(count)
        return out

    def generate_timeseries(self) -> list[dict[str, Any]]:
        return [
            {
                "id": issue.identifier,
                "title": issue.title,
                "team": issue.team_name,
                "timeline": timeline,
            }
            for issue, timeline in self._timelines()
        ]

    def timeline_for(self, identifier: str) -> list[TimelineEvent] | None:
        """Timeline of the issue whose identifier (or id) matches, case-insensitively."""
        wanted = identifier.strip().lower()
        for issue in self.issues:
            candidates = {str(issue.identifier or "").lower(), str(issue.id or "").lower()}
            if wanted in candidates:
                return self.timeline_builder.build_timeline(issue)
        return None
