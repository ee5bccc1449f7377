# cbb_dashboard/services/games.py
"""
Game log for one team, from that team's point of view.

Raw `games` rows are keyed two different ways:
  - final scores by OUTCOME (winner_score / loser_score)
  - period scores by SLOT (team1_h1, team2_h1, ...)
Each is resolved independently for the perspective team; the two are then
cross-checked and a mismatch is reported on the row rather than raised.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from cbb_dashboard.core import config, store
from cbb_dashboard.core.query import select
from cbb_dashboard.models.dashboard_types import (
    BoxScore,
    GameLog,
    GameRow,
    HomeAway,
    RecordSummary,
    VegasSummary,
)
from cbb_dashboard.models.params import GameLogParams
from cbb_dashboard.services.formatting import format_signed, round_half_up, to_float, to_int
from cbb_dashboard.services.teams import UNKNOWN_TEAM

logger = logging.getLogger("cbb_dashboard.games")

OVER_SIGNAL_PCT = 55.0
UNDER_SIGNAL_PCT = 45.0


# -------------------------
# Fetch
# -------------------------
async def fetch_raw_games(params: GameLogParams) -> List[Dict[str, Any]]:
    """
    Newest first.
      - single team: that season, team in either slot
      - head-to-head: every meeting of the pair, any season
    """
    team, opp = params.team_id, params.opponent_id
    if opp is not None:
        q = select(
            config.GAMES_TABLE,
            any_of=[
                {"team1_id": team, "team2_id": opp},
                {"team1_id": opp, "team2_id": team},
            ],
            order_by="game_date",
            ascending=False,
        )
    else:
        q = select(
            config.GAMES_TABLE,
            eq={"season": params.season},
            any_of=[{"team1_id": team}, {"team2_id": team}],
            order_by="game_date",
            ascending=False,
        )
    return await store.fetch_rows(q)


# -------------------------
# Per-row derivation
# -------------------------
def _box(raw: Mapping[str, Any], slot: str) -> BoxScore:
    h1 = to_int(raw.get(f"{slot}_h1"))
    h2 = to_int(raw.get(f"{slot}_h2"))
    ot = to_int(raw.get(f"{slot}_ot"))
    total = None
    if h1 is not None and h2 is not None:
        total = h1 + h2 + (ot or 0)
    return {"h1": h1, "h2": h2, "ot": ot, "total": total}


def home_away_for(raw: Mapping[str, Any], team_id: str) -> HomeAway:
    if raw.get("is_neutral_site"):
        return "Neutral"
    if str(raw.get("home_team_id")) == team_id:
        return "Home"
    return "Away"


def integrity_warning(row: GameRow) -> Optional[str]:
    """Outcome-keyed final vs slot-keyed periods must describe the same game."""
    t, o = row["team_box"]["total"], row["opp_box"]["total"]
    if t is None or o is None:
        return None
    scores = row["team_score"] + row["opponent_score"]
    if scores != t + o:
        return f"score total {scores} != period total {t + o}"
    return None


def derive_game_row(raw: Mapping[str, Any], team_id: str, names: Mapping[str, str]) -> GameRow:
    team_id = str(team_id)
    is_team1 = str(raw.get("team1_id")) == team_id
    opp_id = raw.get("team2_id") if is_team1 else raw.get("team1_id")
    opp_id = str(opp_id) if opp_id is not None else None

    winner_id = raw.get("winner_id")
    winner_id = str(winner_id) if winner_id is not None else None
    winner_score = to_int(raw.get("winner_score")) or 0
    loser_score = to_int(raw.get("loser_score")) or 0
    if winner_id == team_id:
        team_score, opponent_score = winner_score, loser_score
    else:
        team_score, opponent_score = loser_score, winner_score

    team_box = _box(raw, "team1" if is_team1 else "team2")
    opp_box = _box(raw, "team2" if is_team1 else "team1")

    game_id = raw.get("game_id")
    win_prob = raw.get("win_probability")

    row: GameRow = {
        "id": str(game_id) if game_id is not None else None,
        "team_id": team_id,
        "opponent_id": opp_id,
        "opponent_name": names.get(opp_id, UNKNOWN_TEAM) if opp_id else UNKNOWN_TEAM,
        "game_date": str(raw["game_date"]) if raw.get("game_date") is not None else None,
        "home_away": home_away_for(raw, team_id),
        "team_score": team_score,
        "opponent_score": opponent_score,
        "actual_score": f"{team_score}-{opponent_score}",
        "team_box": team_box,
        "opp_box": opp_box,
        "has_ot": bool(team_box["ot"] or opp_box["ot"]),
        "winner_id": winner_id,
        "open_total": to_float(raw.get("open_total")),
        "close_total": to_float(raw.get("close_total")),
        "game_total": to_float(raw.get("game_total")),
        "kp_total": to_float(raw.get("kp_total")),
        "predicted_score": to_float(raw.get("predicted_score")),
        "predicted_possessions": to_float(raw.get("predicted_possessions")),
        "win_probability": str(win_prob) if win_prob is not None else None,
        "integrity_warning": None,
    }
    warning = integrity_warning(row)
    if warning:
        logger.warning("GAMES data integrity game=%s team=%s: %s", row["id"], team_id, warning)
        row["integrity_warning"] = warning
    return row


def derive_game_rows(
    raw_games: Sequence[Mapping[str, Any]],
    team_id: str,
    names: Mapping[str, str],
) -> List[GameRow]:
    """
    Order-preserving; duplicate game ids after the first are dropped.
    Rows without an id are always kept.
    """
    rows: List[GameRow] = []
    seen = set()
    for raw in raw_games:
        row = derive_game_row(raw, team_id, names)
        if row["id"] is None:
            logger.warning("GAMES row without game id kept (date=%s)", row["game_date"])
            rows.append(row)
            continue
        if row["id"] in seen:
            logger.warning("GAMES duplicate game id %s dropped", row["id"])
            continue
        seen.add(row["id"])
        rows.append(row)
    return rows


# -------------------------
# Aggregates
# -------------------------
def summarize_record(rows: Sequence[GameRow]) -> RecordSummary:
    total = len(rows)
    wins = sum(1 for g in rows if g["team_score"] > g["opponent_score"])
    losses = total - wins
    margin = sum(g["team_score"] - g["opponent_score"] for g in rows)
    avg_margin = margin / total if total else 0.0
    return {
        "games": total,
        "wins": wins,
        "losses": losses,
        "winRate": wins / (wins + losses) if (wins + losses) else 0.0,
        "avgMargin": avg_margin,
        "avgMarginDisplay": format_signed(round_half_up(avg_margin, 1), places=1, placeholder="0.0"),
    }


def over_under(row: GameRow) -> Optional[str]:
    """None when the row has no usable closing total."""
    close = row["close_total"]
    if close is None or close <= 0:
        return None
    actual = row["game_total"] or 0.0
    if actual > close:
        return "Over"
    if actual < close:
        return "Under"
    return "Push"


def _pct(n: int, d: int) -> float:
    return round(n / d * 100, 1) if d else 0.0


def summarize_vegas(rows: Sequence[GameRow]) -> VegasSummary:
    """
    Over/under percentages are over rows with a closing total only; the
    beat-prediction rate is over ALL rows.
    """
    outcomes = [over_under(g) for g in rows]
    overs = outcomes.count("Over")
    unders = outcomes.count("Under")
    pushes = outcomes.count("Push")
    counted = overs + unders + pushes

    beat = sum(
        1 for g in rows
        if g["predicted_score"] is not None and g["team_score"] > g["predicted_score"]
    )
    over_pct = _pct(overs, counted)
    if not counted:
        trend = "Balanced"
    elif over_pct > OVER_SIGNAL_PCT:
        trend = "Over"
    elif over_pct < UNDER_SIGNAL_PCT:
        trend = "Under"
    else:
        trend = "Balanced"

    return {
        "totalGames": len(rows),
        "countedGames": counted,
        "overs": overs,
        "unders": unders,
        "pushes": pushes,
        "overPct": over_pct,
        "underPct": _pct(unders, counted),
        "pushPct": _pct(pushes, counted),
        "beatPrediction": beat,
        "beatPredictionRate": beat / len(rows) if rows else 0.0,
        "trend": trend,
    }


async def fetch_game_log(params: GameLogParams, names: Mapping[str, str]) -> GameLog:
    raw = await fetch_raw_games(params)
    rows = derive_game_rows(raw, params.team_id, names)
    logger.info(
        "GAMES team=%s opp=%s season=%s -> %d games",
        params.team_id, params.opponent_id, params.season, len(rows),
    )
    return {
        "games": rows,
        "record": summarize_record(rows),
        "vegas": summarize_vegas(rows),
        "headToHead": params.head_to_head,
    }


def game_log_is_empty(log: GameLog) -> bool:
    return not log["games"]
