# cbb_dashboard/services/schedule.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cbb_dashboard.core import config, store
from cbb_dashboard.core.query import select
from cbb_dashboard.models.dashboard_types import BookLines, ScheduleEntry, Team
from cbb_dashboard.models.params import ScheduleParams
from cbb_dashboard.services.formatting import to_float
from cbb_dashboard.services.teams import TeamRoster

logger = logging.getLogger("cbb_dashboard.schedule")

SPORTSBOOKS = [
    "DraftKings",
    "FanDuel",
    "BetMGM",
    "Caesars",
    "BetRivers",
    "ESPN BET",
    "Bovada",
]

# A provider turns one raw day_schedule row into that book's lines.
LinesProvider = Callable[[Mapping[str, Any]], BookLines]


def _empty_lines(book: str) -> BookLines:
    return {"book": book, "openTotal": None, "closeTotal": None, "sideOpen": None, "sideClose": None}


def _record_lines(raw: Mapping[str, Any]) -> BookLines:
    return {
        "book": config.BOOK_OF_RECORD,
        "openTotal": to_float(raw.get("open_total")),
        "closeTotal": to_float(raw.get("close_total")),
        "sideOpen": to_float(raw.get("side_open")),
        "sideClose": to_float(raw.get("side_close")),
    }


_providers: Dict[str, LinesProvider] = {config.BOOK_OF_RECORD: _record_lines}


def register_lines_provider(book: str, provider: LinesProvider) -> None:
    """Wire a sportsbook to a real data source; callers need no changes."""
    if book not in SPORTSBOOKS:
        raise ValueError(f"unknown sportsbook: {book!r}")
    _providers[book] = provider


def unregister_lines_provider(book: str) -> None:
    if book == config.BOOK_OF_RECORD:
        return
    _providers.pop(book, None)


def lines_for(book: str, raw: Mapping[str, Any]) -> BookLines:
    provider = _providers.get(book)
    if provider is None:
        return _empty_lines(book)
    lines = dict(provider(raw))
    lines["book"] = book
    return lines


def available_books() -> List[Dict[str, Any]]:
    return [
        {"book": b, "wired": b in _providers, "default": b == config.BOOK_OF_RECORD}
        for b in SPORTSBOOKS
    ]


def ny_today() -> date:
    """Treat 'today' as America/New_York."""
    try:
        return datetime.now(ZoneInfo("America/New_York")).date()
    except ZoneInfoNotFoundError:
        # no tz database installed; fall back to local time
        return datetime.now().date()


def _team_ref(roster: TeamRoster, team_id: Any) -> Team:
    tid = str(team_id) if team_id is not None else ""
    return {"id": tid, "name": roster.name_for(tid)}


def build_entry(raw: Mapping[str, Any], roster: TeamRoster, book: str) -> ScheduleEntry:
    winner = raw.get("predicted_winner")
    predicted_winner: Optional[Team] = None
    if winner is not None and winner != "":
        # stored as an id; fall back to the raw value when it is a display name
        team = roster.get(str(winner)) or roster.resolve(str(winner))
        predicted_winner = team or {"id": str(winner), "name": str(winner)}

    score = raw.get("predicted_score")
    home = raw.get("home_team_id")
    return {
        "gameDate": str(raw["game_date"]) if raw.get("game_date") is not None else None,
        "team1": _team_ref(roster, raw.get("team1_id")),
        "team2": _team_ref(roster, raw.get("team2_id")),
        "homeTeamId": str(home) if home is not None else None,
        "predictedWinner": predicted_winner,
        "predictedScore": str(score) if score is not None else None,
        "predictedPossessions": to_float(raw.get("predicted_possessions")),
        "location": raw.get("location"),
        "lines": lines_for(book, raw),
    }


async def fetch_schedule(params: ScheduleParams, roster: TeamRoster) -> List[ScheduleEntry]:
    rows = await store.fetch_rows(
        select(config.SCHEDULE_TABLE, eq={"game_date": params.date})
    )
    logger.info("SCHEDULE date=%s book=%s -> %d games", params.date, params.book, len(rows))
    return [build_entry(r, roster, params.book) for r in rows]
