# cbb_dashboard/services/widgets.py
"""
Per-widget view state: idle -> loading -> success | empty | error.

A Widget owns one fetch function of an immutable params value. Every update
moves straight back to `loading` (the previous result is dropped), and a
response is only committed if it was produced for the params that are still
current; late answers for superseded params are discarded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from cbb_dashboard.core.errors import DataSourceError
from cbb_dashboard.models.params import params_to_dict

logger = logging.getLogger("cbb_dashboard.widgets")

P = TypeVar("P")
T = TypeVar("T")

IDLE = "idle"
LOADING = "loading"
SUCCESS = "success"
EMPTY = "empty"
ERROR = "error"


@dataclass(frozen=True)
class WidgetState:
    status: str = IDLE
    params: Any = None
    data: Any = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "params": params_to_dict(self.params) if self.params is not None else None,
            "data": self.data,
            "error": self.error,
        }


def _default_is_empty(data: Any) -> bool:
    if data is None:
        return True
    try:
        return len(data) == 0
    except TypeError:
        return False


def error_message(exc: BaseException) -> str:
    if isinstance(exc, DataSourceError):
        return str(exc) or "data source error"
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__


async def load_state(
    fetch: Callable[[P], Awaitable[T]],
    params: P,
    is_empty: Callable[[T], bool] = _default_is_empty,
    name: str = "widget",
) -> WidgetState:
    """Run one fetch and classify the outcome. Never raises for fetch errors."""
    try:
        data = await fetch(params)
    except Exception as exc:
        logger.exception("WIDGET %s fetch failed for %s", name, params)
        return WidgetState(status=ERROR, params=params, error=error_message(exc))
    if is_empty(data):
        return WidgetState(status=EMPTY, params=params, data=data)
    return WidgetState(status=SUCCESS, params=params, data=data)


class Widget(Generic[P, T]):
    def __init__(
        self,
        name: str,
        fetch: Callable[[P], Awaitable[T]],
        is_empty: Callable[[T], bool] = _default_is_empty,
    ):
        self.name = name
        self._fetch = fetch
        self._is_empty = is_empty
        self._token = 0
        self.state = WidgetState()

    def clear(self) -> WidgetState:
        """Back to idle, e.g. when an input no longer resolves."""
        self._token += 1
        self.state = WidgetState()
        return self.state

    async def update(self, params: P) -> WidgetState:
        self._token += 1
        token = self._token
        self.state = WidgetState(status=LOADING, params=params)

        result = await load_state(self._fetch, params, self._is_empty, self.name)

        if token != self._token or self.state.params != params:
            logger.info("WIDGET %s discarded stale response for %s", self.name, params)
            return self.state
        self.state = result
        return result
