# cbb_dashboard/services/daily_stats.py
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Optional

from cbb_dashboard.core import config, store
from cbb_dashboard.core.query import select
from cbb_dashboard.models.dashboard_types import Comparison
from cbb_dashboard.models.params import LookupParams
from cbb_dashboard.models.stats import StatName
from cbb_dashboard.services.formatting import format_signed, format_value, to_float

logger = logging.getLogger("cbb_dashboard.daily_stats")

LEAGUE = None  # scope marker: no team id means the league-wide aggregate


async def fetch_scalar(team_id: Optional[str], day: date, stat: StatName) -> Optional[float]:
    """
    One scalar for (team|league, date, stat).
    Zero rows or more than one row both mean "no data", never an error.
    """
    key = stat.to_external_key()
    if team_id is LEAGUE:
        q = select(
            config.LEAGUE_TRENDS_TABLE,
            ["avg_value"],
            eq={"stat_date": day, "stat_name": key},
            limit=2,
        )
        column = "avg_value"
    else:
        q = select(
            config.TEAM_DAILY_STATS_TABLE,
            ["stat_value"],
            eq={"team_id": team_id, "stat_date": day, "stat_name": key},
            limit=2,
        )
        column = "stat_value"

    rows = await store.fetch_rows(q)
    if len(rows) != 1:
        if len(rows) > 1:
            logger.warning(
                "DAILY %s rows for team=%s date=%s stat=%s; treating as no data",
                len(rows), team_id or "league", day, key,
            )
        return None
    return to_float(rows[0].get(column))


def compute_delta(team_value: Optional[float], league_value: Optional[float]) -> Optional[float]:
    if team_value is None or league_value is None:
        return None
    return team_value - league_value


def build_comparison(team_value: Optional[float], league_value: Optional[float]) -> Comparison:
    delta = compute_delta(team_value, league_value)
    return {
        "teamValue": team_value,
        "leagueValue": league_value,
        "delta": round(delta, 6) if delta is not None else None,
        "teamDisplay": format_value(team_value),
        "leagueDisplay": format_value(league_value),
        "deltaDisplay": format_signed(delta),
    }


async def fetch_comparison(params: LookupParams) -> Comparison:
    """Team and league scalars fetched concurrently, combined once both settle."""
    team_value, league_value = await asyncio.gather(
        fetch_scalar(params.team_id, params.date, params.stat),
        fetch_scalar(LEAGUE, params.date, params.stat),
    )
    return build_comparison(team_value, league_value)


def comparison_is_empty(c: Comparison) -> bool:
    return c["teamValue"] is None and c["leagueValue"] is None
