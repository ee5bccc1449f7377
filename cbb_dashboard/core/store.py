# cbb_dashboard/core/store.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional

from cbb_dashboard.core import db, postgrest
from cbb_dashboard.core.errors import DataSourceUnavailable
from cbb_dashboard.core.query import Select

Backend = Callable[[Select], Awaitable[List[Dict[str, Any]]]]

_backend: Optional[Backend] = None


def set_backend(backend: Optional[Backend]) -> None:
    """Pin an explicit backend; None restores auto-selection."""
    global _backend
    _backend = backend


def active_backend_name() -> str | None:
    if _backend is not None:
        return getattr(_backend, "name", "custom")
    if db.is_ready():
        return "sql"
    if postgrest.is_configured():
        return "postgrest"
    return None


def _resolve() -> Backend:
    if _backend is not None:
        return _backend
    # SQL wins when both are configured
    if db.is_ready():
        return db.fetch_rows
    if postgrest.is_configured():
        return postgrest.fetch_rows
    raise DataSourceUnavailable(
        "No stats backend configured (set DATABASE_URL or SUPABASE_URL/SUPABASE_KEY)."
    )


async def fetch_rows(q: Select) -> List[Dict[str, Any]]:
    return await _resolve()(q)
