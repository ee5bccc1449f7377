# cbb_dashboard/core/query.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

Pairs = Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True)
class Select:
    """
    Backend-neutral description of a read-only query.

    - eq:     column = value (all ANDed)
    - in_:    column IN (values)
    - any_of: OR of AND-groups, e.g. both orderings of a head-to-head pairing
    - order_by / ascending / limit
    """

    table: str
    columns: Tuple[str, ...] = ("*",)
    eq: Pairs = ()
    in_: Tuple[Tuple[str, Tuple[Any, ...]], ...] = ()
    any_of: Tuple[Pairs, ...] = ()
    order_by: Optional[str] = None
    ascending: bool = True
    limit: Optional[int] = None


def _pairs(d: Optional[Mapping[str, Any]]) -> Pairs:
    return tuple((d or {}).items())


def select(
    table: str,
    columns: Sequence[str] = ("*",),
    eq: Optional[Mapping[str, Any]] = None,
    in_: Optional[Mapping[str, Iterable[Any]]] = None,
    any_of: Optional[Sequence[Mapping[str, Any]]] = None,
    order_by: Optional[str] = None,
    ascending: bool = True,
    limit: Optional[int] = None,
) -> Select:
    return Select(
        table=table,
        columns=tuple(columns),
        eq=_pairs(eq),
        in_=tuple((col, tuple(vals)) for col, vals in (in_ or {}).items()),
        any_of=tuple(_pairs(group) for group in (any_of or [])),
        order_by=order_by,
        ascending=ascending,
        limit=limit,
    )
