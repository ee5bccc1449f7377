"""Tests for the scalar stat fetcher and team-vs-league comparison."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from cbb_dashboard.core import config, store
from cbb_dashboard.models.params import LookupParams
from cbb_dashboard.models.stats import StatName
from cbb_dashboard.services.daily_stats import (
    LEAGUE,
    build_comparison,
    compute_delta,
    fetch_comparison,
    fetch_scalar,
)

DAY = date(2024, 11, 4)
THREE = StatName.THREE_POINT_PCT


def _team_stat(team_id, value, stat="three-point-pct", day="2024-11-04"):
    return {"team_id": team_id, "stat_date": day, "season_year": 2025, "stat_name": stat, "stat_value": value}


def _league_stat(value, stat="three-point-pct", day="2024-11-04"):
    return {"stat_date": day, "season_year": 2025, "stat_name": stat, "avg_value": value}


class TestFetchScalar:
    @pytest.mark.asyncio
    async def test_team_value(self, fake_store):
        fake_store.add(config.TEAM_DAILY_STATS_TABLE, _team_stat("KP076", "0.385"), _team_stat("KP150", 0.31))
        assert await fetch_scalar("KP076", DAY, THREE) == 0.385

    @pytest.mark.asyncio
    async def test_league_value(self, fake_store):
        fake_store.add(config.LEAGUE_TRENDS_TABLE, _league_stat(0.342), _league_stat(0.5, stat="two-point-pct"))
        assert await fetch_scalar(LEAGUE, DAY, THREE) == 0.342

    @pytest.mark.asyncio
    async def test_no_rows_is_absent(self, fake_store):
        assert await fetch_scalar("KP076", DAY, THREE) is None

    @pytest.mark.asyncio
    async def test_duplicate_rows_are_absent(self, fake_store):
        fake_store.add(config.TEAM_DAILY_STATS_TABLE, _team_stat("KP076", 0.38), _team_stat("KP076", 0.39))
        assert await fetch_scalar("KP076", DAY, THREE) is None

    @pytest.mark.asyncio
    async def test_malformed_value_is_absent(self, fake_store):
        fake_store.add(config.TEAM_DAILY_STATS_TABLE, _team_stat("KP076", "not-a-number"))
        assert await fetch_scalar("KP076", DAY, THREE) is None


class TestComparison:
    def test_delta_example(self):
        c = build_comparison(0.385, 0.342)

        assert c["delta"] == pytest.approx(0.043)
        assert c["deltaDisplay"] == "+0.043"
        assert c["teamDisplay"] == "0.385"
        assert c["leagueDisplay"] == "0.342"

    def test_negative_delta(self):
        assert build_comparison(0.30, 0.342)["deltaDisplay"] == "-0.042"

    def test_missing_side_is_placeholder_not_zero(self):
        c = build_comparison(0.385, None)

        assert compute_delta(0.385, None) is None
        assert c["delta"] is None
        assert c["deltaDisplay"] == "--"
        assert c["leagueDisplay"] == "N/A"

    @pytest.mark.asyncio
    async def test_fetch_comparison(self, fake_store):
        fake_store.add(config.TEAM_DAILY_STATS_TABLE, _team_stat("KP076", 0.385))
        fake_store.add(config.LEAGUE_TRENDS_TABLE, _league_stat(0.342))

        c = await fetch_comparison(LookupParams("KP076", DAY, THREE))

        assert c["deltaDisplay"] == "+0.043"

    @pytest.mark.asyncio
    async def test_team_and_league_fetched_concurrently(self):
        started = []
        both_started = asyncio.Event()

        async def backend(q):
            started.append(q.table)
            if len(started) == 2:
                both_started.set()
            # a serial caller would never release this wait
            await asyncio.wait_for(both_started.wait(), timeout=1.0)
            if q.table == config.LEAGUE_TRENDS_TABLE:
                return [{"avg_value": 0.342}]
            return [{"stat_value": 0.385}]

        store.set_backend(backend)
        try:
            c = await fetch_comparison(LookupParams("KP076", DAY, THREE))
        finally:
            store.set_backend(None)

        assert sorted(started) == sorted([config.TEAM_DAILY_STATS_TABLE, config.LEAGUE_TRENDS_TABLE])
        assert c["deltaDisplay"] == "+0.043"
