# cbb_dashboard/routers/schedule_routes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from cbb_dashboard.core import config
from cbb_dashboard.models.params import ScheduleParams
from cbb_dashboard.services.inputs import parse_date
from cbb_dashboard.services.schedule import SPORTSBOOKS, available_books, fetch_schedule, ny_today
from cbb_dashboard.services.teams import get_roster
from cbb_dashboard.services.widgets import ERROR, WidgetState, error_message, load_state

logger = logging.getLogger("cbb_dashboard.schedule")
router = APIRouter(prefix="/schedule", tags=["Schedule"])


# -------------------------
# 🗓️  Day schedule + odds
# -------------------------
@router.get("")
async def day_schedule(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; default = today (America/New_York)"),
    book: Optional[str] = Query(None, description="Sportsbook; default = book of record"),
):
    """
    Games on a date with predictions and the chosen sportsbook's lines.
    Books without a wired data source come back with empty lines.
    """
    selected = book or config.BOOK_OF_RECORD
    try:
        day = parse_date(date, default=ny_today())
        if selected not in SPORTSBOOKS and selected != config.BOOK_OF_RECORD:
            raise ValueError(f"book must be one of {SPORTSBOOKS}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    params = ScheduleParams(date=day, book=selected)
    try:
        roster = await get_roster()
    except Exception as e:
        logger.exception("schedule: roster load failed: %s", e)
        return WidgetState(status=ERROR, params=params, error=error_message(e)).to_dict()

    async def _load(p: ScheduleParams):
        return await fetch_schedule(p, roster)

    state = await load_state(_load, params, name="schedule")
    return state.to_dict()


@router.get("/books")
async def books():
    """
    The sportsbook selector options and which ones have data wired.
    """
    return available_books()
