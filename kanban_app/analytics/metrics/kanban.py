"""Overall and per-team kanban metrics built from the individual calculators."""

from __future__ import annotations

from collections.abc import Iterable

from kanban_app.core.config import DEFAULT_TEAM_NAME
from kanban_app.core.models import IssueModel, KanbanMetrics

from .flow_efficiency import FlowEfficiencyCalculator
from .partition import partition_issues
from .throughput import ThroughputCalculator
from .time_metrics import TimeMetricsCalculator


def overall_metrics(issues: Iterable[IssueModel]) -> KanbanMetrics:
    """Counts for every bucket plus time, throughput and flow stats.

    Time, throughput and flow-efficiency figures use completed issues only.
    """
    issues = list(issues)
    if not issues:
        return KanbanMetrics()
    completed, in_progress, backlog = partition_issues(issues)
    counts = {
        "total_issues": len(issues),
        "completed_issues": len(completed),
        "in_progress_issues": len(in_progress),
        "backlog_issues": len(backlog),
    }
    if not completed:
        return KanbanMetrics(**counts)
    time_calculator = TimeMetricsCalculator(completed)
    return KanbanMetrics(
        **counts,
        cycle_time=time_calculator.cycle_time_stats(),
        lead_time=time_calculator.lead_time_stats(),
        throughput=ThroughputCalculator(completed).stats(),
        flow_efficiency=FlowEfficiencyCalculator(completed).calculate(),
    )


def group_by_team(issues: Iterable[IssueModel]) -> dict[str, list[IssueModel]]:
    groups: dict[str, list[IssueModel]] = {}
    for issue in issues:
        groups.setdefault(issue.team_name or DEFAULT_TEAM_NAME, []).append(issue)
    return groups


def team_metrics(issues: Iterable[IssueModel]) -> dict[str, KanbanMetrics]:
    return {team: overall_metrics(team_issues) for team, team_issues in group_by_team(issues).items()}
