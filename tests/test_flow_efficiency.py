from kanban_app.analytics.metrics.flow_efficiency import FlowEfficiencyCalculator, issue_efficiency


def test_empty_history_contributes_zero(issue):
    assert issue_efficiency(issue(history=[])) == 0.0


def test_started_origin_is_fully_active(issue):
    mapped = issue(
        history=[
            ("2024-01-01T00:00:00.000Z", ("Todo", "unstarted"), ("In Progress", "started")),
            ("2024-01-03T00:00:00.000Z", ("In Progress", "started"), ("Done", "completed")),
        ]
    )
    assert issue_efficiency(mapped) == 1.0


def test_origin_state_decides_attribution(issue):
    mapped = issue(
        history=[
            ("2024-01-01T00:00:00.000Z", None, ("Backlog", "backlog")),
            ("2024-01-02T00:00:00.000Z", ("Backlog", "backlog"), ("In Progress", "started")),
            ("2024-01-05T00:00:00.000Z", ("In Progress", "started"), ("Done", "completed")),
        ]
    )
    # backlog span (1 day) is inactive, started span (3 days) is active
    assert issue_efficiency(mapped) == 0.75


def test_zero_total_time(issue):
    mapped = issue(
        history=[
            ("2024-01-01T00:00:00.000Z", None, ("In Progress", "started")),
            ("2024-01-01T00:00:00.000Z", None, ("Done", "completed")),
        ]
    )
    assert issue_efficiency(mapped) == 0.0


def test_overall_percentage(issue):
    active = issue(
        "A",
        history=[
            ("2024-01-01T00:00:00.000Z", None, ("In Progress", "started")),
            ("2024-01-02T00:00:00.000Z", None, ("Done", "completed")),
        ],
    )
    idle = issue("B", history=[])
    assert FlowEfficiencyCalculator([active, idle]).calculate() == 50.0
    assert FlowEfficiencyCalculator([]).calculate() == 0.0
