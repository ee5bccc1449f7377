"""Tests for the team roster resolver."""

from __future__ import annotations

import pytest

from cbb_dashboard.core import config
from cbb_dashboard.services.teams import TeamRoster, get_roster, load_teams


class TestTeamRoster:
    def test_resolve_exact_name(self, roster):
        assert roster.resolve("Duke")["id"] == "KP076"

    def test_resolve_is_case_sensitive(self, roster):
        assert roster.resolve("duke") is None
        assert roster.resolve("Duke ") is None
        assert roster.resolve("") is None
        assert roster.resolve(None) is None

    def test_sorted_by_name(self, roster):
        assert [t["name"] for t in roster.teams] == ["Duke", "Kentucky", "North Carolina"]

    def test_name_for_falls_back(self, roster):
        assert roster.name_for("KP150") == "North Carolina"
        assert roster.name_for("KP999") == "Unknown"
        assert roster.name_for(None) == "Unknown"

    def test_duplicate_name_keeps_first(self):
        r = TeamRoster([{"id": "A", "name": "Miami"}, {"id": "B", "name": "Miami"}])
        assert r.resolve("Miami")["id"] == "A"
        assert len(r) == 2


class TestLoadTeams:
    @pytest.mark.asyncio
    async def test_load_orders_by_name_and_skips_bad_rows(self, fake_store):
        fake_store.add(config.TEAMS_TABLE, {"team_id": None, "team_name": "Ghost"}, {"team_id": 7, "team_name": "Auburn"})

        teams = await load_teams()

        assert teams[0] == {"id": "7", "name": "Auburn"}
        assert "Ghost" not in [t["name"] for t in teams]
        q = fake_store.queries_for(config.TEAMS_TABLE)[-1]
        assert q.order_by == "team_name"

    @pytest.mark.asyncio
    async def test_get_roster_caches(self, fake_store):
        first = await get_roster()
        second = await get_roster()

        assert first is second
        assert len(fake_store.queries_for(config.TEAMS_TABLE)) == 1
