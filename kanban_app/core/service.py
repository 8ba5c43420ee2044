"""KanbanService: orchestrates fetching, mapping, and metric computation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from kanban_app.analytics.metrics.kanban import overall_metrics, team_metrics
from kanban_app.analytics.timeseries.analyzer import TimeseriesAnalyzer

from .client import LinearClient
from .mappers import issues_to_dataframe, map_issues
from .models import IssueModel, KanbanMetrics
from .paginator import ProgressCallback
from .query_options import QueryOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimeseriesReport:
    status_flow: dict[str, int] = field(default_factory=dict)
    time_in_status: dict[str, float] = field(default_factory=dict)
    daily_counts: dict[str, dict[str, int]] = field(default_factory=dict)
    tickets: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class KanbanReport:
    """Everything a formatter needs; consumers must treat it as read-only."""

    metrics: KanbanMetrics
    team_metrics: dict[str, KanbanMetrics] | None = None
    timeseries: TimeseriesReport | None = None
    issues: list[IssueModel] | None = None


class KanbanService:
    def __init__(self, client: LinearClient):
        self.client = client

    # ------------------ Fetch Methods ------------------
    def fetch_issues(
        self,
        options: QueryOptions,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[IssueModel]:
        raw = self.client.fetch(options, progress=progress)
        if progress:
            progress(f"Mapping {len(raw)} issues", None, None)
        return map_issues(raw)

    # ------------------ Reporting ------------------
    def build_report(
        self,
        issues: list[IssueModel],
        *,
        include_team_metrics: bool = False,
        include_timeseries: bool = False,
        include_issues: bool = False,
    ) -> KanbanReport:
        logger.info("Calculating metrics for %s issues", len(issues))
        timeseries = None
        if include_timeseries:
            analyzer = TimeseriesAnalyzer(issues)
            timeseries = TimeseriesReport(
                status_flow=analyzer.status_flow_analysis(),
                time_in_status=analyzer.average_time_in_status(),
                daily_counts=analyzer.daily_status_counts(),
                tickets=analyzer.generate_timeseries(),
            )
        return KanbanReport(
            metrics=overall_metrics(issues),
            team_metrics=team_metrics(issues) if include_team_metrics else None,
            timeseries=timeseries,
            issues=list(issues) if include_issues else None,
        )

    def fetch_report(
        self,
        options: QueryOptions,
        *,
        progress: ProgressCallback | None = None,
        **report_flags: bool,
    ) -> KanbanReport:
        issues = self.fetch_issues(options, progress=progress)
        if progress:
            progress("Calculating kanban metrics", None, None)
        return self.build_report(issues, **report_flags)

    def issues_frame(self, issues: list[IssueModel]) -> pd.DataFrame:
        if not issues:
            return pd.DataFrame()
        return issues_to_dataframe(issues).sort_values(by="updated_at", ascending=False, na_position="last")
