# cbb_dashboard/services/formatting.py
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

NO_VALUE = "N/A"
NO_DELTA = "--"


def to_float(v: Any) -> Optional[float]:
    """Lenient numeric coercion; anything unparseable (or NaN) -> None."""
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    if math.isnan(f):
        return None
    return f


def to_int(v: Any) -> Optional[int]:
    f = to_float(v)
    return int(round(f)) if f is not None else None


def round_half_up(v: float, places: int = 1) -> float:
    """Half away from zero, as the dashboard displays it: 9.25 -> 9.3, -9.25 -> -9.3."""
    q = Decimal(1).scaleb(-places)
    return float(Decimal(str(v)).quantize(q, rounding=ROUND_HALF_UP))


def format_value(v: Optional[float], places: int = 3) -> str:
    return f"{v:.{places}f}" if v is not None else NO_VALUE


def format_signed(v: Optional[float], places: int = 3, placeholder: str = NO_DELTA) -> str:
    """Leading '+' on positive values: 0.043 -> '+0.043'."""
    if v is None:
        return placeholder
    return f"{v:+.{places}f}" if v > 0 else f"{v:.{places}f}"
