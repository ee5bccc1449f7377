# cbb_dashboard/services/regression.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from cbb_dashboard.models.params import RegressionParams
from cbb_dashboard.models.stats import REGRESSION_FEATURES, REGRESSION_TARGETS

logger = logging.getLogger("cbb_dashboard.regression")


def build_params(team: Optional[str], features: Iterable[str], target: str) -> RegressionParams:
    """Validate a regression request. Raises ValueError on unknown keys."""
    feats = []
    for f in features:
        if f not in REGRESSION_FEATURES:
            raise ValueError(f"unknown feature: {f!r}")
        if f not in feats:
            feats.append(f)
    if not feats:
        raise ValueError("at least one feature is required")
    if target not in REGRESSION_TARGETS:
        raise ValueError(f"unknown target: {target!r}")
    team = (team or "").strip() or None
    return RegressionParams(team=team, features=tuple(feats), target=target)


def run_regression(params: RegressionParams) -> Dict[str, Any]:
    # Placeholder: no model is fitted yet. The request is echoed back so the
    # front end can show what would run.
    message = (
        f'Regression not wired yet: team "{params.team or "ALL"}", '
        f"features [{', '.join(params.features)}] -> target \"{params.target}\"."
    )
    logger.info("REGRESSION placeholder %s", message)
    return {"ran": False, "message": message}
