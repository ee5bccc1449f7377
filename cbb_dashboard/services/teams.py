# cbb_dashboard/services/teams.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from cbb_dashboard.core import config, store
from cbb_dashboard.core.query import select
from cbb_dashboard.models.dashboard_types import Team

logger = logging.getLogger("cbb_dashboard.teams")

UNKNOWN_TEAM = "Unknown"


class TeamRoster:
    """Name <-> id lookup over the team list loaded at startup."""

    def __init__(self, teams: List[Team]):
        self.teams = sorted(teams, key=lambda t: t["name"])
        self._by_id: Dict[str, Team] = {t["id"]: t for t in self.teams}
        self._by_name: Dict[str, Team] = {}
        for t in self.teams:
            # first id wins on a duplicated display name
            self._by_name.setdefault(t["name"], t)

    def __len__(self) -> int:
        return len(self.teams)

    def resolve(self, name: Optional[str]) -> Optional[Team]:
        """Exact, case-sensitive match on the name as typed. None = no match."""
        if not name:
            return None
        return self._by_name.get(name)

    def get(self, team_id: Optional[str]) -> Optional[Team]:
        if team_id is None:
            return None
        return self._by_id.get(str(team_id))

    def name_for(self, team_id: Optional[str], default: str = UNKNOWN_TEAM) -> str:
        team = self.get(team_id)
        return team["name"] if team else default

    def name_map(self) -> Dict[str, str]:
        return {t["id"]: t["name"] for t in self.teams}


async def load_teams() -> List[Team]:
    """All teams ordered by name."""
    rows = await store.fetch_rows(
        select(config.TEAMS_TABLE, ["team_id", "team_name"], order_by="team_name")
    )
    teams: List[Team] = []
    for r in rows:
        tid = r.get("team_id")
        name = r.get("team_name")
        if tid is None or not name:
            continue
        teams.append({"id": str(tid), "name": str(name)})
    logger.info("TEAMS loaded %d teams", len(teams))
    return teams


# ---------- process-wide roster (loaded once) ----------
_roster: Optional[TeamRoster] = None


async def get_roster() -> TeamRoster:
    global _roster
    if _roster is None:
        _roster = TeamRoster(await load_teams())
    return _roster


def reset_roster() -> None:
    global _roster
    _roster = None
