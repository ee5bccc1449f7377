# cbb_dashboard/core/db.py
import logging
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Tuple
from urllib.parse import urlparse, urlunparse, parse_qsl, urlencode

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine

from cbb_dashboard.core import config
from cbb_dashboard.core.errors import DataSourceUnavailable, QueryFailed
from cbb_dashboard.core.query import Select

logger = logging.getLogger("cbb_dashboard.db")

_engine: AsyncEngine | None = None

_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _ensure_asyncpg(url: str) -> str:
    """
    Normalize any postgres URL to asyncpg + ssl=require.
    Works for:
      - postgres://...
      - postgresql://...
      - postgresql+psycopg2://...
    A libpq-style `sslmode` is rewritten to asyncpg's `ssl`.
    """
    if not url:
        return url

    # normalize scheme
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql+psycopg2://"):
        url = "postgresql://" + url[len("postgresql+psycopg2://"):]
    if not url.startswith("postgresql+asyncpg://"):
        url = "postgresql+asyncpg://" + url.split("postgresql://", 1)[-1]

    parsed = urlparse(url)
    q = dict(parse_qsl(parsed.query))
    if "sslmode" in q:
        q.setdefault("ssl", q.pop("sslmode"))
    q.setdefault("ssl", "require")
    final_url = urlunparse(parsed._replace(query=urlencode(q)))

    # minimal debug (no secrets)
    logger.info(
        "[DB] Using asyncpg URL -> host=%s port=%s ssl=%s",
        parsed.hostname or "?",
        parsed.port or "?",
        q.get("ssl"),
    )
    return final_url


def get_database_url() -> str | None:
    raw = config.DATABASE_URL
    if not raw:
        logger.info("[DB] DATABASE_URL not set; SQL backend disabled.")
        return None
    return _ensure_asyncpg(raw)


async def init_engine() -> AsyncEngine | None:
    global _engine
    url = get_database_url()
    if not url:
        return None
    _engine = create_async_engine(url, pool_pre_ping=True)
    return _engine


async def close_engine():
    global _engine
    if _engine:
        await _engine.dispose()
        _engine = None


def is_ready() -> bool:
    return _engine is not None


def _ident(name: str) -> str:
    if not _IDENT.match(name):
        raise ValueError(f"invalid identifier: {name!r}")
    return name


def to_sql(q: Select) -> Tuple[str, Dict[str, Any]]:
    """Compile a Select into parameterised SQL for `text()`."""
    params: Dict[str, Any] = {}

    def bind(value: Any) -> str:
        key = f"p{len(params)}"
        params[key] = value
        return f":{key}"

    where: List[str] = []
    for col, val in q.eq:
        where.append(f"{_ident(col)} = {bind(val)}")
    for col, vals in q.in_:
        if not vals:
            where.append("FALSE")
            continue
        where.append(f"{_ident(col)} IN ({', '.join(bind(v) for v in vals)})")
    if q.any_of:
        groups = [
            "(" + " AND ".join(f"{_ident(c)} = {bind(v)}" for c, v in group) + ")"
            for group in q.any_of
        ]
        where.append("(" + " OR ".join(groups) + ")")

    cols = ", ".join("*" if c == "*" else _ident(c) for c in q.columns)
    sql = f"SELECT {cols} FROM {_ident(q.table)}"
    if where:
        sql += " WHERE " + " AND ".join(where)
    if q.order_by:
        sql += f" ORDER BY {_ident(q.order_by)} {'ASC' if q.ascending else 'DESC'}"
    if q.limit is not None:
        sql += f" LIMIT {bind(int(q.limit))}"
    return sql, params


def _plain(value: Any) -> Any:
    # asyncpg hands back Decimal/date; rows leave this layer JSON-shaped
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


async def fetch_rows(q: Select) -> List[Dict[str, Any]]:
    if not _engine:
        raise DataSourceUnavailable("DATABASE_URL not set; DB layer disabled.")
    sql, params = to_sql(q)
    try:
        async with _engine.connect() as conn:
            result = await conn.execute(text(sql), params)
            rows = result.mappings().all()
    except SQLAlchemyError as e:
        logger.warning("[DB] query on %s failed: %s", q.table, e)
        raise QueryFailed(f"{q.table} query failed") from e
    return [{k: _plain(v) for k, v in row.items()} for row in rows]
