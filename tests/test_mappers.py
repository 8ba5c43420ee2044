from datetime import UTC, datetime

from kanban_app.core.mappers import issues_to_dataframe, map_issue, map_issues, parse_dt
from kanban_app.core.models import StateType


def test_parse_dt():
    assert parse_dt("2024-01-02T03:04:05.000Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert parse_dt(None) is None
    assert parse_dt("") is None
    assert parse_dt("not-a-date") is None


def test_map_issue_fields(raw_issue):
    raw = raw_issue(
        "ENG-7",
        state=("In Progress", "started"),
        started="2024-01-03T00:00:00.000Z",
        history=[("2024-01-03T00:00:00.000Z", ("Todo", "unstarted"), ("In Progress", "started"))],
    )
    issue = map_issue(raw)
    assert issue.identifier == "ENG-7"
    assert issue.state.name == "In Progress"
    assert issue.state_type is StateType.STARTED
    assert issue.team_name == "Engineering"
    assert issue.assignee_name == "Alice"
    assert issue.priority == 2
    assert issue.estimate == 3.0
    assert issue.started_at == datetime(2024, 1, 3, tzinfo=UTC)
    assert len(issue.history) == 1
    assert issue.history[0].from_state.type is StateType.UNSTARTED
    assert issue.raw is raw


def test_unknown_state_type_is_unclassified(raw_issue):
    assert map_issue(raw_issue(state=("Triage", "triage"))).state_type is StateType.UNCLASSIFIED
    assert map_issue(raw_issue(state=None)).state_type is StateType.UNCLASSIFIED


def test_work_started_falls_back_to_history(issue):
    mapped = issue(
        history=[
            ("2024-01-02T00:00:00.000Z", ("Backlog", "backlog"), ("Todo", "unstarted")),
            ("2024-01-04T12:00:00.000Z", ("Todo", "unstarted"), ("In Progress", "started")),
        ]
    )
    assert mapped.started_at is None
    assert mapped.work_started_at == datetime(2024, 1, 4, 12, tzinfo=UTC)


def test_map_issues_passes_through_models(issue, raw_issue):
    mapped = issue("ENG-1")
    out = map_issues([mapped, raw_issue("ENG-2")])
    assert out[0] is mapped
    assert out[1].identifier == "ENG-2"


def test_issues_to_dataframe(issue):
    df = issues_to_dataframe([issue("ENG-1", team=None), issue("ENG-2")])
    assert list(df["identifier"]) == ["ENG-1", "ENG-2"]
    assert df.loc[0, "team"] == "Unknown Team"
    assert df.loc[0, "state_type"] == "completed"
