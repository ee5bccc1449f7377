"""Shared pytest fixtures: an in-memory stats store standing in for the backend."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

import pytest

from cbb_dashboard.core import config, store
from cbb_dashboard.core.query import Select
from cbb_dashboard.services import teams as teams_service


def _norm(v: Any) -> Any:
    if isinstance(v, date):
        return v.isoformat()
    return v


def _matches(row: Dict[str, Any], q: Select) -> bool:
    for col, val in q.eq:
        if _norm(row.get(col)) != _norm(val):
            return False
    for col, vals in q.in_:
        if _norm(row.get(col)) not in [_norm(v) for v in vals]:
            return False
    if q.any_of:
        if not any(all(_norm(row.get(c)) == _norm(v) for c, v in group) for group in q.any_of):
            return False
    return True


class FakeBackend:
    """Evaluates Select descriptions against lists of dict rows."""

    name = "fake"

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]] | None = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = tables or {}
        self.queries: List[Select] = []
        self.fail_tables: Dict[str, Exception] = {}

    def add(self, table: str, *rows: Dict[str, Any]) -> None:
        self.tables.setdefault(table, []).extend(rows)

    def queries_for(self, table: str) -> List[Select]:
        return [q for q in self.queries if q.table == table]

    async def __call__(self, q: Select) -> List[Dict[str, Any]]:
        self.queries.append(q)
        if q.table in self.fail_tables:
            raise self.fail_tables[q.table]
        rows = [r for r in self.tables.get(q.table, []) if _matches(r, q)]
        if q.order_by:
            rows.sort(key=lambda r: str(r.get(q.order_by)), reverse=not q.ascending)
        if q.limit is not None:
            rows = rows[: q.limit]
        if q.columns != ("*",):
            rows = [{c: r.get(c) for c in q.columns} for r in rows]
        return [dict(r) for r in rows]


TEAMS = [
    {"team_id": "KP076", "team_name": "Duke"},
    {"team_id": "KP150", "team_name": "North Carolina"},
    {"team_id": "KP100", "team_name": "Kentucky"},
]


@pytest.fixture
def fake_store(monkeypatch):
    """Fresh fake backend with the three-team roster preloaded."""
    monkeypatch.setattr(config, "DATABASE_URL", None)
    monkeypatch.setattr(config, "SUPABASE_URL", None)
    monkeypatch.setattr(config, "SUPABASE_KEY", None)
    backend = FakeBackend()
    backend.add(config.TEAMS_TABLE, *TEAMS)
    store.set_backend(backend)
    teams_service.reset_roster()
    yield backend
    store.set_backend(None)
    teams_service.reset_roster()


@pytest.fixture
def roster():
    return teams_service.TeamRoster([{"id": t["team_id"], "name": t["team_name"]} for t in TEAMS])


def raw_game(
    game_id: str,
    game_date: str,
    team1: str,
    team2: str,
    winner: str,
    winner_score: int,
    loser_score: int,
    **extra: Any,
) -> Dict[str, Any]:
    row = {
        "game_id": game_id,
        "game_date": game_date,
        "season": 2025,
        "team1_id": team1,
        "team2_id": team2,
        "winner_id": winner,
        "winner_score": winner_score,
        "loser_score": loser_score,
        "home_team_id": team1,
        "is_neutral_site": False,
    }
    row.update(extra)
    return row
