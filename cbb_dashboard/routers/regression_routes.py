# cbb_dashboard/routers/regression_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from cbb_dashboard.models.stats import REGRESSION_FEATURES, REGRESSION_TARGETS
from cbb_dashboard.services.regression import build_params, run_regression

router = APIRouter(prefix="/regression", tags=["Regression"])


class RegressionRequest(BaseModel):
    team: Optional[str] = None
    features: List[str] = Field(default_factory=lambda: ["three_p_pct", "two_p_pct"])
    target: str = "off_eff"


@router.get("/options")
async def regression_options():
    return {"features": REGRESSION_FEATURES, "targets": REGRESSION_TARGETS}


@router.post("/run")
async def regression_run(req: RegressionRequest):
    """
    Placeholder: validates the request and reports what would run.
    """
    try:
        params = build_params(req.team, req.features, req.target)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return run_regression(params)
