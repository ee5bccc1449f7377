# cbb_dashboard/models/params.py
"""
One immutable parameter value per widget. Any change to a driving input builds
a new value; fetchers and derivations are functions of that value alone.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Optional, Tuple

from cbb_dashboard.models.stats import StatName


@dataclass(frozen=True)
class LookupParams:
    team_id: str
    date: date
    stat: StatName


@dataclass(frozen=True)
class LeagueTrendParams:
    season: int
    stat: StatName


@dataclass(frozen=True)
class TeamTrendParams:
    team_id: str
    season: int
    stat: StatName


@dataclass(frozen=True)
class GameLogParams:
    team_id: str
    season: int
    opponent_id: Optional[str] = None

    @property
    def head_to_head(self) -> bool:
        return self.opponent_id is not None


@dataclass(frozen=True)
class ProfileParams:
    team_id: str
    season: int


@dataclass(frozen=True)
class ScheduleParams:
    date: date
    book: str


@dataclass(frozen=True)
class RegressionParams:
    team: Optional[str]
    features: Tuple[str, ...]
    target: str


def params_to_dict(params: Any) -> Dict[str, Any]:
    """JSON-friendly view of a params value (enums -> external key, dates -> ISO)."""
    out: Dict[str, Any] = {}
    for k, v in asdict(params).items():
        if isinstance(v, StatName):
            v = v.to_external_key()
        elif isinstance(v, date):
            v = v.isoformat()
        elif isinstance(v, tuple):
            v = list(v)
        out[k] = v
    return out
