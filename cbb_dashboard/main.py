# cbb_dashboard/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time

from cbb_dashboard.core import config, db, store

# ------------ Router imports ------------
from cbb_dashboard.routers import (
    league_routes,
    team_routes,
    schedule_routes,
    regression_routes,
)

# ------------ Logging ------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cbb_dashboard")


# ------------ Lifespan (DB engine) ------------
@asynccontextmanager
async def lifespan(_app: FastAPI):
    await db.init_engine()
    logger.info("stats backend: %s", store.active_backend_name() or "none")
    try:
        yield
    finally:
        await db.close_engine()


# ------------ App ------------
app = FastAPI(
    title="CBB Analytics Dashboard API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# ------------ Access log middleware ------------
class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        t0 = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            dt = (time.perf_counter() - t0) * 1000
            logger.info(
                "ACCESS %s %s q=%s -> %s in %.1fms",
                request.method,
                request.url.path,
                request.url.query,
                status,
                dt,
            )
        return response


app.add_middleware(AccessLogMiddleware)

# ------------ CORS (read-only API; open) ------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ------------ Global error handler ------------
@app.exception_handler(Exception)
async def _unhandled(request: Request, exc: Exception):
    logger.exception("UNHANDLED ERROR: %s %s", request.method, request.url)
    return JSONResponse(status_code=500, content={"error": "internal_error"})


# ------------ Health & status ------------
@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/status")
async def status():
    return {
        "ok": True,
        "backend": store.active_backend_name(),
        "has_database_url": bool(config.DATABASE_URL),
        "has_supabase": bool(config.SUPABASE_URL and config.SUPABASE_KEY),
        "default_season": config.DEFAULT_SEASON,
        "book_of_record": config.BOOK_OF_RECORD,
    }


# ------------ Mount routers ------------
app.include_router(league_routes.router, prefix="/api")
app.include_router(team_routes.router, prefix="/api")
app.include_router(schedule_routes.router, prefix="/api")
app.include_router(regression_routes.router, prefix="/api")
