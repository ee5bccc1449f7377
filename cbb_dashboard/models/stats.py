# cbb_dashboard/models/stats.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List


class StatName(Enum):
    """
    Daily stat keys. Each member carries both spellings so they cannot drift:
      - external key (hyphenated): what the stat tables store in `stat_name`
      - internal key (underscored): what charts / regression features use
    """

    THREE_POINT_PCT = ("three_p_pct", "three-point-pct", "3P%")
    TWO_POINT_PCT = ("two_p_pct", "two-point-pct", "2P%")
    FREE_THROW_PCT = ("ft_pct", "free-throw-pct", "FT%")
    THREE_POINT_RATE = ("three_point_rate", "three-point-rate", "3P Rate")
    FREE_THROWS_MADE_PER_GAME = ("ftm_pg", "free-throws-made-per-game", "FT Made/G")
    OPP_THREE_POINT_PCT = ("opp_three_p_pct", "opponent-three-point-pct", "Opp 3P%")
    OPP_TWO_POINT_PCT = ("opp_two_p_pct", "opponent-two-point-pct", "Opp 2P%")
    OPP_FREE_THROW_PCT = ("opp_ft_pct", "opponent-free-throw-pct", "Opp FT%")
    OPP_FREE_THROWS_MADE_PER_GAME = ("opp_ftm_pg", "opponent-free-throws-made-per-game", "Opp FT Made/G")
    OPP_THREE_POINT_RATE = ("opp_three_point_rate", "opponent-three-point-rate", "Opp 3P Rate")

    def __init__(self, internal: str, external: str, label: str):
        self.internal = internal
        self.external = external
        self.label = label

    def to_external_key(self) -> str:
        return self.external

    def to_internal_key(self) -> str:
        return self.internal

    @classmethod
    def parse(cls, key: str) -> "StatName":
        """Accepts either spelling; raises ValueError on anything else."""
        k = (key or "").strip()
        for member in cls:
            if k in (member.external, member.internal):
                return member
        raise ValueError(f"unknown stat: {key!r}")


DEFAULT_STAT = StatName.THREE_POINT_PCT

# Regression surface also accepts model-level efficiency keys
REGRESSION_FEATURES = ["three_p_pct", "two_p_pct", "ft_pct", "off_eff", "def_eff", "kp_total"]
REGRESSION_TARGETS = ["off_eff", "def_eff", "kp_total", "three_p_pct"]


def stat_catalogue() -> List[Dict[str, str]]:
    return [
        {"key": s.to_external_key(), "internalKey": s.to_internal_key(), "label": s.label}
        for s in StatName
    ]
