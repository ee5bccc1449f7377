"""Endpoint tests against the in-memory store."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import raw_game

from cbb_dashboard.core import config
from cbb_dashboard.core.errors import QueryFailed
from cbb_dashboard.main import app


@pytest.fixture
def client(fake_store):
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"ok": True}

    def test_status_reports_backend(self, client):
        body = client.get("/status").json()
        assert body["backend"] == "fake"
        assert body["has_database_url"] is False


class TestLeagueRoutes:
    def test_stats_catalogue(self, client):
        body = client.get("/api/stats").json()
        assert len(body) == 10

    def test_league_trend(self, client, fake_store):
        fake_store.add(
            config.LEAGUE_TRENDS_TABLE,
            {"season_year": 2025, "stat_name": "two-point-pct", "stat_date": "2025-01-01", "avg_value": 0.51},
        )
        body = client.get("/api/league/trend", params={"stat": "two_p_pct", "season": 2025}).json()

        assert body["status"] == "success"
        assert body["params"] == {"season": 2025, "stat": "two-point-pct"}
        assert body["data"]["current"] == 0.51

    def test_league_trend_empty(self, client):
        body = client.get("/api/league/trend", params={"season": 2022}).json()
        assert body["status"] == "empty"

    def test_unknown_stat_is_400(self, client):
        assert client.get("/api/league/trend", params={"stat": "possessions"}).status_code == 400

    def test_lookup_by_name(self, client, fake_store):
        fake_store.add(
            config.TEAM_DAILY_STATS_TABLE,
            {"team_id": "KP076", "stat_date": "2024-11-04", "stat_name": "three-point-pct", "stat_value": 0.385},
        )
        fake_store.add(
            config.LEAGUE_TRENDS_TABLE,
            {"stat_date": "2024-11-04", "stat_name": "three-point-pct", "avg_value": 0.342},
        )
        body = client.get("/api/league/lookup", params={"team": "Duke", "date": "2024-11-04"}).json()

        assert body["status"] == "success"
        assert body["params"]["team_id"] == "KP076"
        assert body["data"]["deltaDisplay"] == "+0.043"

    def test_lookup_unmatched_name_is_idle(self, client, fake_store):
        body = client.get("/api/league/lookup", params={"team": "duke", "date": "2024-11-04"}).json()

        assert body["status"] == "idle"
        assert fake_store.queries_for(config.TEAM_DAILY_STATS_TABLE) == []

    def test_lookup_no_data(self, client):
        body = client.get("/api/league/lookup", params={"teamId": "KP076", "date": "2024-11-04"}).json()

        assert body["status"] == "empty"
        assert body["data"]["teamDisplay"] == "N/A"

    def test_lookup_bad_date(self, client):
        assert client.get("/api/league/lookup", params={"team": "Duke", "date": "nope"}).status_code == 400

    def test_query_failure_is_error_state(self, client, fake_store):
        fake_store.fail_tables[config.LEAGUE_TRENDS_TABLE] = QueryFailed("league_daily_trends query failed")
        body = client.get("/api/league/trend").json()

        assert body["status"] == "error"
        assert body["error"] == "league_daily_trends query failed"


class TestTeamRoutes:
    def test_roster(self, client):
        body = client.get("/api/teams").json()
        assert [t["name"] for t in body["data"]] == ["Duke", "Kentucky", "North Carolina"]

    def test_resolve(self, client):
        assert client.get("/api/teams/resolve", params={"name": "Duke"}).json()["team"]["id"] == "KP076"
        assert client.get("/api/teams/resolve", params={"name": "duke"}).json()["team"] is None

    def test_games(self, client, fake_store):
        fake_store.add(
            config.GAMES_TABLE,
            raw_game("g1", "2025-01-02", "KP076", "KP150", "KP076", 70, 65, close_total=130, game_total=135),
            raw_game("g2", "2025-01-09", "KP100", "KP076", "KP100", 75, 60, close_total=120, game_total=135),
        )
        body = client.get("/api/teams/KP076/games", params={"season": 2025}).json()

        assert body["status"] == "success"
        assert [g["id"] for g in body["data"]["games"]] == ["g2", "g1"]
        assert body["data"]["games"][0]["opponent_name"] == "Kentucky"
        assert body["data"]["record"]["wins"] == 1
        assert body["data"]["vegas"]["overPct"] == 100.0

    def test_head_to_head_games(self, client, fake_store):
        fake_store.add(
            config.GAMES_TABLE,
            raw_game("g1", "2025-01-02", "KP076", "KP150", "KP076", 70, 65),
            raw_game("g0", "2023-01-02", "KP150", "KP076", "KP076", 80, 79, season=2023),
        )
        body = client.get("/api/teams/KP076/games", params={"opponentId": "KP150"}).json()

        assert body["params"]["opponent_id"] == "KP150"
        assert body["data"]["record"]["wins"] == 2
        assert body["data"]["record"]["winRate"] == 1.0

    def test_trend_and_profile_empty(self, client):
        assert client.get("/api/teams/KP076/trend").json()["status"] == "empty"
        assert client.get("/api/teams/KP076/profile").json()["status"] == "empty"

    def test_bad_season(self, client):
        assert client.get("/api/teams/KP076/games", params={"season": 1990}).status_code == 400

    def test_head_to_head_ignores_season(self, client, fake_store):
        fake_store.add(config.GAMES_TABLE, raw_game("g1", "2021-01-02", "KP076", "KP150", "KP076", 70, 65, season=2021))
        res = client.get("/api/teams/KP076/games", params={"opponentId": "KP150", "season": 2019})

        assert res.status_code == 200
        assert [g["id"] for g in res.json()["data"]["games"]] == ["g1"]


class TestScheduleAndRegression:
    def test_schedule(self, client, fake_store):
        fake_store.add(
            config.SCHEDULE_TABLE,
            {"game_date": "2025-02-01", "team1_id": "KP076", "team2_id": "KP150", "close_total": 150},
        )
        body = client.get("/api/schedule", params={"date": "2025-02-01"}).json()

        assert body["status"] == "success"
        assert body["data"][0]["team1"]["name"] == "Duke"
        assert body["data"][0]["lines"]["closeTotal"] == 150.0

    def test_schedule_unknown_book(self, client):
        assert client.get("/api/schedule", params={"book": "Nowhere"}).status_code == 400

    def test_books(self, client):
        assert len(client.get("/api/schedule/books").json()) == 7

    def test_regression_placeholder(self, client):
        res = client.post(
            "/api/regression/run",
            json={"team": "Duke", "features": ["three_p_pct", "off_eff"], "target": "kp_total"},
        )
        body = res.json()

        assert res.status_code == 200
        assert body["ran"] is False
        assert "three_p_pct, off_eff" in body["message"]

    def test_regression_rejects_unknown_target(self, client):
        res = client.post("/api/regression/run", json={"features": ["ft_pct"], "target": "wins"})
        assert res.status_code == 400
