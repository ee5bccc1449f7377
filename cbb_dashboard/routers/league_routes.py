# cbb_dashboard/routers/league_routes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from cbb_dashboard.models.params import LeagueTrendParams, LookupParams
from cbb_dashboard.models.stats import stat_catalogue
from cbb_dashboard.services.daily_stats import comparison_is_empty, fetch_comparison
from cbb_dashboard.services.inputs import parse_date, parse_season, parse_stat
from cbb_dashboard.services.teams import get_roster
from cbb_dashboard.services.trends import fetch_league_series, league_series_is_empty
from cbb_dashboard.services.widgets import ERROR, WidgetState, error_message, load_state

logger = logging.getLogger("cbb_dashboard.league")
router = APIRouter(tags=["League"])


# -------------------------
# 📋  Stat catalogue
# -------------------------
@router.get("/stats")
async def stats():
    """
    Every recognized stat, with both key spellings and a display label.
    """
    return stat_catalogue()


# -------------------------
# 📈  League — Season trend
# -------------------------
@router.get("/league/trend")
async def league_trend(
    stat: Optional[str] = Query(None, description="e.g. three-point-pct (default)"),
    season: Optional[int] = Query(None, description="Season year; default DEFAULT_SEASON"),
):
    """
    League-wide daily averages for one stat over a season, ascending by date,
    plus the latest value as a KPI.
    """
    try:
        params = LeagueTrendParams(season=parse_season(season), stat=parse_stat(stat))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = await load_state(fetch_league_series, params, league_series_is_empty, "league_trend")
    return state.to_dict()


# -------------------------
# 🔎  League — Daily team lookup
# -------------------------
@router.get("/league/lookup")
async def daily_lookup(
    date: str = Query(..., description="YYYY-MM-DD"),
    team: Optional[str] = Query(None, description="Team name, exact match"),
    teamId: Optional[str] = Query(None),
    stat: Optional[str] = Query(None),
):
    """
    One team's value for a stat on a date vs the league average that day.
    An unmatched team name leaves the widget idle (nothing is fetched).
    """
    try:
        day = parse_date(date)
        stat_name = parse_stat(stat)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    team_id = teamId
    if team_id is None:
        try:
            roster = await get_roster()
        except Exception as e:
            logger.exception("lookup: roster load failed: %s", e)
            return WidgetState(status=ERROR, error=error_message(e)).to_dict()
        match = roster.resolve(team)
        if match is None:
            return WidgetState().to_dict()
        team_id = match["id"]

    params = LookupParams(team_id=team_id, date=day, stat=stat_name)
    state = await load_state(fetch_comparison, params, comparison_is_empty, "lookup")
    return state.to_dict()
