# cbb_dashboard/services/inputs.py
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from cbb_dashboard.core import config
from cbb_dashboard.models.stats import DEFAULT_STAT, StatName


def parse_date(date_str: Optional[str], default: Optional[date] = None) -> date:
    """
    Accepts:
      - 'YYYY-MM-DD'
      - 'YYYYMMDD'
      - ISO-like values ('2024-11-04T00:00:00Z')
      - None -> `default` (ValueError if there is none)
    """
    if not date_str:
        if default is None:
            raise ValueError("date is required")
        return default

    s = date_str.strip()
    digits = re.sub(r"\D", "", s[:10])
    if len(digits) == 8:
        try:
            return datetime.strptime(digits, "%Y%m%d").date()
        except ValueError:
            pass
    raise ValueError(f"could not parse date '{date_str}' (expected YYYY-MM-DD)")


def parse_stat(key: Optional[str]) -> StatName:
    if not key:
        return DEFAULT_STAT
    return StatName.parse(key)


def parse_season(season: Optional[int]) -> int:
    if season is None:
        return config.DEFAULT_SEASON
    if season not in config.AVAILABLE_SEASONS:
        raise ValueError(f"season must be one of {config.AVAILABLE_SEASONS}")
    return season
