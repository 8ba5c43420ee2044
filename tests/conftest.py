"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import kanban_app` works. Also provides a factory for raw
Linear issue payloads shared across test modules.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _state(name, state_type):
    return {"id": f"state-{name}", "name": name, "type": state_type}


def make_raw_issue(
    identifier="ENG-1",
    *,
    state=("Done", "completed"),
    team="Engineering",
    created="2024-01-01T00:00:00.000Z",
    started=None,
    completed=None,
    history=(),
    **extra,
):
    """Build a Linear-shaped issue dict.

    ``history`` is a sequence of ``(timestamp, from_state, to_state)`` tuples where
    each state is a ``(name, type)`` pair or None.
    """
    nodes = []
    for idx, (ts, from_state, to_state) in enumerate(history):
        nodes.append(
            {
                "id": f"{identifier}-h{idx}",
                "createdAt": ts,
                "fromState": _state(*from_state) if from_state else None,
                "toState": _state(*to_state) if to_state else None,
            }
        )
    raw = {
        "id": f"id-{identifier}",
        "identifier": identifier,
        "title": f"Issue {identifier}",
        "state": _state(*state) if state else None,
        "team": {"id": f"team-{team}", "name": team} if team else None,
        "assignee": {"id": "user-1", "name": "Alice"},
        "priority": 2,
        "estimate": 3,
        "createdAt": created,
        "updatedAt": created,
        "startedAt": started,
        "completedAt": completed,
        "archivedAt": None,
        "history": {"nodes": nodes},
    }
    raw.update(extra)
    return raw


@pytest.fixture
def raw_issue():
    return make_raw_issue


@pytest.fixture
def issue(raw_issue):
    from kanban_app.core.mappers import map_issue

    def _build(*args, **kwargs):
        return map_issue(raw_issue(*args, **kwargs))

    return _build
