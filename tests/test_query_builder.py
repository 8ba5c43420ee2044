from kanban_app.core.query_builder import ISSUES_QUERY, build_issues_query
from kanban_app.core.query_options import QueryOptions


def test_minimal_payload():
    payload = build_issues_query(QueryOptions())
    assert payload["query"] == ISSUES_QUERY
    assert payload["variables"] == {"first": 250}


def test_team_and_dates_share_one_filter():
    opts = QueryOptions(team_id="ENG", start_date="2024-01-01", end_date="2024-01-31")
    variables = build_issues_query(opts)["variables"]
    assert variables["filter"] == {
        "team": {"key": {"eq": "ENG"}},
        "updatedAt": {"gte": "2024-01-01T00:00:00.000Z", "lte": "2024-01-31T23:59:59.999Z"},
    }


def test_uuid_team_uses_id_filter():
    team = "3f2c1a9e-0b1d-4c5e-9f8a-1234567890ab"
    variables = build_issues_query(QueryOptions(team_id=team))["variables"]
    assert variables["filter"] == {"team": {"id": {"eq": team}}}


def test_date_bounds_are_independent():
    start_only = build_issues_query(QueryOptions(start_date="2024-02-01"))["variables"]
    end_only = build_issues_query(QueryOptions(end_date="2024-02-29"))["variables"]
    assert start_only["filter"] == {"updatedAt": {"gte": "2024-02-01T00:00:00.000Z"}}
    assert end_only["filter"] == {"updatedAt": {"lte": "2024-02-29T23:59:59.999Z"}}


def test_include_archived_is_top_level():
    variables = build_issues_query(QueryOptions(team_id="ENG", include_archived=True))["variables"]
    assert variables["includeArchived"] is True
    assert "includeArchived" not in variables["filter"]


def test_cursor_and_page_size():
    variables = build_issues_query(QueryOptions(page_size=50), "cursor-1")["variables"]
    assert variables["first"] == 50
    assert variables["after"] == "cursor-1"


def test_payload_is_deterministic():
    opts = QueryOptions(team_id="ENG", start_date="2024-01-01", include_archived=True)
    assert build_issues_query(opts, "abc") == build_issues_query(opts, "abc")
