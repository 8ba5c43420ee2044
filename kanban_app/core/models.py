"""Domain data models for Linear issues, history events, and metric results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class StateType(Enum):
    COMPLETED = "completed"
    STARTED = "started"
    UNSTARTED = "unstarted"
    BACKLOG = "backlog"
    CANCELED = "canceled"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def from_raw(cls, value: str | None) -> StateType:
        """Map a Linear ``state.type`` string; unknown values become UNCLASSIFIED."""
        if not value:
            return cls.UNCLASSIFIED
        text = str(value).strip().lower()
        if text == "cancelled":
            text = "canceled"
        for member in cls:
            if member.value == text and member is not cls.UNCLASSIFIED:
                return member
        return cls.UNCLASSIFIED


class EventKind(Enum):
    CREATED = "created"
    STATUS_CHANGE = "status_change"


@dataclass(frozen=True, slots=True)
class WorkflowState:
    name: str | None
    type: StateType = StateType.UNCLASSIFIED


@dataclass(frozen=True, slots=True)
class HistoryEvent:
    timestamp: datetime | None
    from_state: WorkflowState | None = None
    to_state: WorkflowState | None = None


@dataclass(slots=True)
class IssueModel:
    id: str | None
    identifier: str | None
    title: str | None
    state: WorkflowState
    team_id: str | None
    team_name: str | None
    assignee_name: str | None
    priority: int | None
    estimate: float | None
    created_at: datetime | None
    updated_at: datetime | None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    archived_at: datetime | None = None
    history: list[HistoryEvent] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def state_type(self) -> StateType:
        return self.state.type

    @property
    def work_started_at(self) -> datetime | None:
        """When work began: ``startedAt`` or the first move into a started state."""
        if self.started_at is not None:
            return self.started_at
        for event in self.history:
            if event.to_state is not None and event.to_state.type is StateType.STARTED:
                return event.timestamp
        return None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None


@dataclass(frozen=True, slots=True)
class TimelineEvent:
    timestamp: datetime
    from_state: str | None
    to_state: str
    kind: EventKind


@dataclass(frozen=True, slots=True)
class TimeStats:
    average: float = 0.0
    median: float = 0.0
    p95: float = 0.0


@dataclass(frozen=True, slots=True)
class ThroughputStats:
    weekly_avg: float = 0.0
    total_completed: int = 0


@dataclass(frozen=True, slots=True)
class KanbanMetrics:
    total_issues: int = 0
    completed_issues: int = 0
    in_progress_issues: int = 0
    backlog_issues: int = 0
    cycle_time: TimeStats = field(default_factory=TimeStats)
    lead_time: TimeStats = field(default_factory=TimeStats)
    throughput: ThroughputStats = field(default_factory=ThroughputStats)
    flow_efficiency: float = 0.0
