# cbb_dashboard/services/trends.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from cbb_dashboard.core import config, store
from cbb_dashboard.core.query import select
from cbb_dashboard.models.dashboard_types import LeaguePoint, ProfileAxis, SeriesPoint
from cbb_dashboard.models.params import LeagueTrendParams, ProfileParams, TeamTrendParams
from cbb_dashboard.models.stats import StatName
from cbb_dashboard.services.formatting import to_float

logger = logging.getLogger("cbb_dashboard.trends")

# Style profile axes: (label, stat, elite ceiling)
PROFILE_METRICS = [
    ("3P%", StatName.THREE_POINT_PCT, 0.45),
    ("2P%", StatName.TWO_POINT_PCT, 0.60),
    ("FT%", StatName.FREE_THROW_PCT, 0.85),
    ("Opp 3P%", StatName.OPP_THREE_POINT_PCT, 0.40),
    ("Opp 2P%", StatName.OPP_TWO_POINT_PCT, 0.60),
]


# -------------------------
# Raw fetches
# -------------------------
async def fetch_team_rows(team_id: str, season: int, stat: StatName) -> List[Dict[str, Any]]:
    return await store.fetch_rows(
        select(
            config.TEAM_DAILY_STATS_TABLE,
            ["stat_date", "stat_value"],
            eq={"team_id": team_id, "season_year": season, "stat_name": stat.to_external_key()},
            order_by="stat_date",
        )
    )


async def fetch_league_rows(season: int, stat: StatName) -> List[Dict[str, Any]]:
    return await store.fetch_rows(
        select(
            config.LEAGUE_TRENDS_TABLE,
            ["stat_date", "avg_value"],
            eq={"season_year": season, "stat_name": stat.to_external_key()},
            order_by="stat_date",
        )
    )


# -------------------------
# League overview
# -------------------------
async def fetch_league_series(params: LeagueTrendParams) -> Dict[str, Any]:
    rows = await fetch_league_rows(params.season, params.stat)
    points: List[LeaguePoint] = [
        {"date": str(r.get("stat_date")), "value": to_float(r.get("avg_value")) or 0.0}
        for r in rows
    ]
    return {
        "stat": params.stat.to_external_key(),
        "label": params.stat.label,
        "points": points,
        "current": points[-1]["value"] if points else None,
    }


# -------------------------
# Team vs league
# -------------------------
def merge_series(
    team_rows: Sequence[Dict[str, Any]],
    league_rows: Sequence[Dict[str, Any]],
) -> List[SeriesPoint]:
    """
    One point per team row, in team order. League value comes from the exact
    same date or is None; nothing is interpolated.
    """
    league_by_date: Dict[str, Optional[float]] = {
        str(r.get("stat_date")): to_float(r.get("avg_value")) for r in league_rows
    }
    merged: List[SeriesPoint] = []
    for t in team_rows:
        d = str(t.get("stat_date"))
        merged.append(
            {
                "date": d,
                "teamValue": to_float(t.get("stat_value")) or 0.0,
                "leagueValue": league_by_date.get(d),
            }
        )
    return merged


async def fetch_series(params: TeamTrendParams) -> List[SeriesPoint]:
    team_rows, league_rows = await asyncio.gather(
        fetch_team_rows(params.team_id, params.season, params.stat),
        fetch_league_rows(params.season, params.stat),
    )
    merged = merge_series(team_rows, league_rows)
    gaps = sum(1 for p in merged if p["leagueValue"] is None)
    if gaps:
        logger.info(
            "TRENDS team=%s season=%s stat=%s -> %d points, %d without league value",
            params.team_id, params.season, params.stat.to_external_key(), len(merged), gaps,
        )
    return merged


# -------------------------
# Style profile (radar)
# -------------------------
def _mean_for(rows: Sequence[Dict[str, Any]], stat_key: str, value_key: str) -> float:
    vals = [to_float(r.get(value_key)) or 0.0 for r in rows if r.get("stat_name") == stat_key]
    if not vals:
        return 0.0
    return sum(vals) / len(vals)


def build_profile(
    team_rows: Sequence[Dict[str, Any]],
    league_rows: Sequence[Dict[str, Any]],
) -> List[ProfileAxis]:
    """Season averages per axis, scaled x100 and rounded to one decimal."""
    axes: List[ProfileAxis] = []
    for label, stat, ceiling in PROFILE_METRICS:
        key = stat.to_external_key()
        axes.append(
            {
                "subject": label,
                "stat": key,
                "team": round(_mean_for(team_rows, key, "stat_value") * 100, 1),
                "league": round(_mean_for(league_rows, key, "avg_value") * 100, 1),
                "fullMark": round(ceiling * 100, 1),
            }
        )
    return axes


async def fetch_profile(params: ProfileParams) -> List[ProfileAxis]:
    keys = [stat.to_external_key() for _, stat, _ in PROFILE_METRICS]
    team_rows, league_rows = await asyncio.gather(
        store.fetch_rows(
            select(
                config.TEAM_DAILY_STATS_TABLE,
                ["stat_name", "stat_value"],
                eq={"team_id": params.team_id, "season_year": params.season},
                in_={"stat_name": keys},
            )
        ),
        store.fetch_rows(
            select(
                config.LEAGUE_TRENDS_TABLE,
                ["stat_name", "avg_value"],
                eq={"season_year": params.season},
                in_={"stat_name": keys},
            )
        ),
    )
    if not team_rows and not league_rows:
        return []
    return build_profile(team_rows, league_rows)


def league_series_is_empty(data: Dict[str, Any]) -> bool:
    return not data["points"]
