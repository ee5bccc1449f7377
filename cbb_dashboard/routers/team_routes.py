# cbb_dashboard/routers/team_routes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from cbb_dashboard.models.params import GameLogParams, ProfileParams, TeamTrendParams
from cbb_dashboard.services.games import fetch_game_log, game_log_is_empty
from cbb_dashboard.services.inputs import parse_season, parse_stat
from cbb_dashboard.services.teams import get_roster
from cbb_dashboard.services.trends import fetch_profile, fetch_series
from cbb_dashboard.services.widgets import ERROR, WidgetState, error_message, load_state

logger = logging.getLogger("cbb_dashboard.team")
router = APIRouter(prefix="/teams", tags=["Teams"])


# -------------------------
# 🏀  Roster
# -------------------------
@router.get("")
async def teams():
    """
    All teams ordered by name (loaded once per process).
    """
    async def _load(_):
        return (await get_roster()).teams

    state = await load_state(_load, None, name="roster")
    return state.to_dict()


@router.get("/resolve")
async def resolve_team(name: str = Query(..., description="Exact, case-sensitive team name")):
    """
    Free-text name -> team. No match returns `team: null`, not an error.
    """
    try:
        roster = await get_roster()
    except Exception as e:
        logger.exception("resolve failed for name=%s: %s", name, e)
        raise HTTPException(status_code=503, detail=error_message(e))
    return {"name": name, "team": roster.resolve(name)}


# -------------------------
# 🗒️  Game log + summaries
# -------------------------
@router.get("/{team_id}/games")
async def team_games(
    team_id: str,
    season: Optional[int] = Query(None),
    opponentId: Optional[str] = Query(None, description="Head-to-head mode; season is ignored"),
):
    """
    Game log from this team's point of view, newest first, with record and
    betting summaries. With an opponent, every historical meeting is returned.
    """
    opponent_id = opponentId or None
    try:
        # season is ignored head-to-head
        season_value = parse_season(None if opponent_id else season)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    params = GameLogParams(team_id=team_id, season=season_value, opponent_id=opponent_id)

    try:
        names = (await get_roster()).name_map()
    except Exception as e:
        logger.exception("games: roster load failed: %s", e)
        return WidgetState(status=ERROR, params=params, error=error_message(e)).to_dict()

    async def _load(p: GameLogParams):
        return await fetch_game_log(p, names)

    state = await load_state(_load, params, game_log_is_empty, "game_log")
    return state.to_dict()


# -------------------------
# 📈  Team vs league trend
# -------------------------
@router.get("/{team_id}/trend")
async def team_trend(
    team_id: str,
    season: Optional[int] = Query(None),
    stat: Optional[str] = Query(None),
):
    """
    Daily team series merged with the league average by date. Dates the
    league table lacks carry `leagueValue: null` (a gap, not a zero).
    """
    try:
        params = TeamTrendParams(team_id=team_id, season=parse_season(season), stat=parse_stat(stat))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = await load_state(fetch_series, params, name="team_trend")
    return state.to_dict()


# -------------------------
# 🎯  Style profile
# -------------------------
@router.get("/{team_id}/profile")
async def team_profile(team_id: str, season: Optional[int] = Query(None)):
    """
    Season-average shooting/defense profile vs league (radar axes, x100).
    """
    try:
        params = ProfileParams(team_id=team_id, season=parse_season(season))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = await load_state(fetch_profile, params, name="profile")
    return state.to_dict()
