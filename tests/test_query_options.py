from kanban_app.core.query_options import QueryOptions, clamp_page_size


def test_clamp_page_size():
    assert clamp_page_size(1000) == 250
    assert clamp_page_size(10) == 10
    assert clamp_page_size(0) == 1
    assert clamp_page_size(-5) == 1
    assert clamp_page_size(None) == 250


def test_clamp_page_size_strings():
    assert clamp_page_size("50") == 50
    assert clamp_page_size("abc") == 250
    assert clamp_page_size("900") == 250


def test_page_size_clamped_on_direct_construction():
    assert QueryOptions(page_size=1000).page_size == 250


def test_from_raw_defaults():
    opts = QueryOptions.from_raw({})
    assert opts.page_size == 250
    assert opts.no_cache is False
    assert opts.include_archived is False
    assert opts.team_id is None


def test_cache_key_data_excludes_presentation_fields():
    opts = QueryOptions.from_raw(
        {"team_id": "ENG", "start_date": "2024-01-01", "page_size": 10, "no_cache": True}
    )
    assert opts.cache_key_data() == {
        "team_id": "ENG",
        "start_date": "2024-01-01",
        "include_archived": False,
    }
