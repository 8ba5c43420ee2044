from kanban_app.analytics.timeseries.analyzer import TimeseriesAnalyzer


def _flow_issue(issue, identifier, day, *, with_creation=True):
    return issue(
        identifier,
        created=f"2024-01-{day:02d}T00:00:00.000Z" if with_creation else None,
        history=[
            (f"2024-01-{day:02d}T00:00:00.000Z", None, ("Todo", "unstarted")),
            (f"2024-01-{day + 1:02d}T12:00:00.000Z", ("Todo", "unstarted"), ("In Progress", "started")),
        ],
    )


def test_status_flow_most_frequent_first(issue):
    analyzer = TimeseriesAnalyzer(
        [
            _flow_issue(issue, "ENG-1", 1, with_creation=False),
            _flow_issue(issue, "ENG-2", 3, with_creation=False),
            _flow_issue(issue, "ENG-3", 5),
        ]
    )
    flow = analyzer.status_flow_analysis()
    assert list(flow.items()) == [("Todo → In Progress", 3), ("created → Todo", 1)]


def test_average_time_in_status(issue):
    analyzer = TimeseriesAnalyzer([_flow_issue(issue, "ENG-1", 1), _flow_issue(issue, "ENG-2", 3)])
    averages = analyzer.average_time_in_status()
    assert averages == {"created": 0.0, "Todo": 1.5}


def test_daily_status_counts(issue):
    analyzer = TimeseriesAnalyzer([_flow_issue(issue, "ENG-1", 1), _flow_issue(issue, "ENG-2", 2)])
    counts = analyzer.daily_status_counts()
    assert list(counts) == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert counts["2024-01-01"] == {"Todo": 1, "created": 1}
    assert counts["2024-01-02"] == {"In Progress": 1, "Todo": 1, "created": 1}
    assert counts["2024-01-03"] == {"In Progress": 1}


def test_empty_analyzer():
    analyzer = TimeseriesAnalyzer([])
    assert analyzer.status_flow_analysis() == {}
    assert analyzer.average_time_in_status() == {}
    assert analyzer.daily_status_counts() == {}
    assert analyzer.generate_timeseries() == []


def test_generate_timeseries_and_lookup(issue):
    analyzer = TimeseriesAnalyzer([_flow_issue(issue, "ENG-1", 1)])
    tickets = analyzer.generate_timeseries()
    assert tickets[0]["id"] == "ENG-1"
    assert tickets[0]["team"] == "Engineering"
    assert len(tickets[0]["timeline"]) == 3
    assert len(analyzer.timeline_for(" eng-1 ")) == 3
    assert analyzer.timeline_for("ENG-404") is None
