# cbb_dashboard/core/postgrest.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Tuple

import httpx

from cbb_dashboard.core import config
from cbb_dashboard.core.errors import DataSourceUnavailable, QueryFailed
from cbb_dashboard.core.query import Select

logger = logging.getLogger("cbb_dashboard.postgrest")

HEADERS = {"Accept": "application/json"}
_RESERVED = set(',()"')


def is_configured() -> bool:
    return bool(config.SUPABASE_URL and config.SUPABASE_KEY)


def _value(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if v is None:
        return "null"
    if isinstance(v, date):
        return v.isoformat()
    s = str(v)
    if any(ch in _RESERVED for ch in s):
        return '"' + s.replace('"', '\\"') + '"'
    return s


def to_params(q: Select) -> List[Tuple[str, str]]:
    """
    Translate a Select into PostgREST query params:
      col=eq.v, col=in.(a,b), or=(and(a.eq.1,b.eq.2),and(...)), order=col.asc
    """
    params: List[Tuple[str, str]] = [("select", ",".join(q.columns))]
    for col, val in q.eq:
        params.append((col, f"eq.{_value(val)}"))
    for col, vals in q.in_:
        params.append((col, "in.(" + ",".join(_value(v) for v in vals) + ")"))
    if q.any_of:
        groups = ",".join(
            "and(" + ",".join(f"{c}.eq.{_value(v)}" for c, v in group) + ")"
            for group in q.any_of
        )
        params.append(("or", f"({groups})"))
    if q.order_by:
        params.append(("order", f"{q.order_by}.{'asc' if q.ascending else 'desc'}"))
    if q.limit is not None:
        params.append(("limit", str(int(q.limit))))
    return params


async def fetch_rows(q: Select) -> List[Dict[str, Any]]:
    if not is_configured():
        raise DataSourceUnavailable("SUPABASE_URL / SUPABASE_KEY not set; REST layer disabled.")

    url = f"{config.SUPABASE_URL.rstrip('/')}/rest/v1/{q.table}"
    headers = {
        **HEADERS,
        "apikey": config.SUPABASE_KEY,
        "Authorization": f"Bearer {config.SUPABASE_KEY}",
    }
    try:
        async with httpx.AsyncClient(timeout=config.SUPABASE_TIMEOUT, headers=headers) as client:
            r = await client.get(url, params=to_params(q))
            r.raise_for_status()
            data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("postgrest %s failed: %s", q.table, e)
        raise QueryFailed(f"{q.table} query failed: {e}") from e

    if not isinstance(data, list):
        raise QueryFailed(f"{q.table} returned an unexpected payload")
    return data
