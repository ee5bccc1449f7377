# cbb_dashboard/services/session.py
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Dict, Optional

from cbb_dashboard.models.params import (
    GameLogParams,
    LeagueTrendParams,
    LookupParams,
    ProfileParams,
    ScheduleParams,
    TeamTrendParams,
)
from cbb_dashboard.models.stats import StatName
from cbb_dashboard.services.daily_stats import comparison_is_empty, fetch_comparison
from cbb_dashboard.services.games import fetch_game_log, game_log_is_empty
from cbb_dashboard.services.schedule import fetch_schedule
from cbb_dashboard.services.teams import TeamRoster, get_roster
from cbb_dashboard.services.trends import (
    fetch_league_series,
    fetch_profile,
    fetch_series,
    league_series_is_empty,
)
from cbb_dashboard.services.widgets import Widget, WidgetState

logger = logging.getLogger("cbb_dashboard.session")


class DashboardSession:
    """
    One user's dashboard: a roster loaded once plus a widget per panel.
    Free-text team names go through the roster first; an unresolved name
    leaves the dependent widget idle instead of firing a fetch.
    """

    def __init__(self, roster: TeamRoster):
        self.roster = roster
        self.lookup = Widget("lookup", fetch_comparison, comparison_is_empty)
        self.league_trend = Widget("league_trend", fetch_league_series, league_series_is_empty)
        self.team_trend = Widget("team_trend", fetch_series)
        self.profile = Widget("profile", fetch_profile)
        self.game_log = Widget("game_log", self._fetch_game_log, game_log_is_empty)
        self.schedule = Widget("schedule", self._fetch_schedule)

    @classmethod
    async def start(cls) -> "DashboardSession":
        return cls(await get_roster())

    async def _fetch_game_log(self, params: GameLogParams):
        return await fetch_game_log(params, self.roster.name_map())

    async def _fetch_schedule(self, params: ScheduleParams):
        return await fetch_schedule(params, self.roster)

    # -------------------------
    # League tab
    # -------------------------
    async def show_league_trend(self, season: int, stat: StatName) -> WidgetState:
        return await self.league_trend.update(LeagueTrendParams(season=season, stat=stat))

    async def lookup_by_name(self, team_name: str, day: date, stat: StatName) -> WidgetState:
        team = self.roster.resolve(team_name)
        if team is None:
            return self.lookup.clear()
        return await self.lookup.update(LookupParams(team_id=team["id"], date=day, stat=stat))

    # -------------------------
    # Team tab
    # -------------------------
    async def select_team(
        self,
        team_name: str,
        season: int,
        stat: StatName,
        opponent_name: Optional[str] = None,
    ) -> Dict[str, WidgetState]:
        team = self.roster.resolve(team_name)
        if team is None:
            for w in (self.game_log, self.team_trend, self.profile):
                w.clear()
            return self.team_states()

        opponent = self.roster.resolve(opponent_name) if opponent_name else None
        opponent_id = opponent["id"] if opponent else None

        updates = [self.game_log.update(GameLogParams(team["id"], season, opponent_id))]
        if opponent_id is None:
            # trend and profile panels only exist in single-team mode
            updates.append(self.team_trend.update(TeamTrendParams(team["id"], season, stat)))
            updates.append(self.profile.update(ProfileParams(team["id"], season)))
        else:
            self.team_trend.clear()
            self.profile.clear()
        await asyncio.gather(*updates)
        return self.team_states()

    def team_states(self) -> Dict[str, WidgetState]:
        return {
            "games": self.game_log.state,
            "trend": self.team_trend.state,
            "profile": self.profile.state,
        }

    # -------------------------
    # Schedule tab
    # -------------------------
    async def show_schedule(self, day: date, book: str) -> WidgetState:
        return await self.schedule.update(ScheduleParams(date=day, book=book))
