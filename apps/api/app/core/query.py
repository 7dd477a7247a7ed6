"""
Query translation: untrusted query-string values -> bounded, typed list query.

Per-family behaviour lives in ListSpec tables; `translate` is the only entry point.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from app.core.errors import bad_request

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)


@dataclass(frozen=True)
class RangeFilter:
    column: str
    min_param: str
    max_param: str

    @property
    def range_code(self) -> str:
        return f"INVALID_{self.column.upper()}_RANGE"


@dataclass(frozen=True)
class ListSpec:
    sortable: Tuple[str, ...]
    default_sort: str = "name"
    search_columns: Tuple[str, ...] = ("name",)
    fk_filters: Tuple[str, ...] = ()
    choice_filters: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    bool_filters: Tuple[str, ...] = ()
    ranges: Tuple[RangeFilter, ...] = ()


@dataclass(frozen=True)
class ListQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = "id"
    sort_order: str = "ASC"
    search: Optional[str] = None
    filters: Mapping[str, Any] = field(default_factory=dict)
    ranges: Mapping[str, Tuple[Optional[int], Optional[int]]] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _raw(params: Mapping[str, Any], key: str) -> Optional[str]:
    v = params.get(key)
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _parse_int(raw: str) -> Optional[int]:
    if not _INT_RE.fullmatch(raw):
        return None
    return int(raw)


def _pagination_error():
    return bad_request(
        "INVALID_PAGINATION",
        f"Invalid pagination parameters. Page must be >= 1, limit must be between 1 and {MAX_LIMIT}",
    )


def translate(params: Mapping[str, Any], spec: ListSpec) -> ListQuery:
    """Turn raw query parameters into a ListQuery, or raise a CatalogError rejection."""
    page = DEFAULT_PAGE
    raw_page = _raw(params, "page")
    if raw_page is not None:
        p = _parse_int(raw_page)
        if p is None or p < 1:
            raise _pagination_error()
        page = p

    limit = DEFAULT_LIMIT
    raw_limit = _raw(params, "limit")
    if raw_limit is not None:
        lim = _parse_int(raw_limit)
        if lim is None or lim < 1 or lim > MAX_LIMIT:
            raise _pagination_error()
        limit = lim

    sort_by = _raw(params, "sortBy") or spec.default_sort
    if sort_by not in spec.sortable:
        raise bad_request(
            "INVALID_SORT",
            f"Invalid sortBy parameter. Allowed values: {', '.join(spec.sortable)}",
        )

    sort_order = (_raw(params, "sortOrder") or "ASC").upper()
    if sort_order not in ("ASC", "DESC"):
        raise bad_request("INVALID_SORT_ORDER", "Invalid sortOrder parameter. Allowed values: asc, desc")

    filters: Dict[str, Any] = {}

    for name in spec.fk_filters:
        raw = _raw(params, name)
        if raw is None:
            continue
        v = _parse_int(raw)
        if v is None or v <= 0:
            raise bad_request(f"INVALID_{name.upper()}", f"Invalid {name} parameter")
        filters[name] = v

    for name, choices in spec.choice_filters.items():
        raw = _raw(params, name)
        if raw is None:
            continue
        if raw not in choices:
            raise bad_request(
                f"INVALID_{name.upper()}",
                f"Invalid {name} parameter. Allowed values: {', '.join(choices)}",
            )
        filters[name] = raw

    for name in spec.bool_filters:
        raw = _raw(params, name)
        if raw is None:
            continue
        lowered = raw.lower()
        if lowered not in ("true", "false"):
            raise bad_request(f"INVALID_{name.upper()}", f"Invalid {name} parameter. Use true or false")
        filters[name] = lowered == "true"

    ranges: Dict[str, Tuple[Optional[int], Optional[int]]] = {}
    for rf in spec.ranges:
        bounds = []
        for param in (rf.min_param, rf.max_param):
            raw = _raw(params, param)
            if raw is None:
                bounds.append(None)
                continue
            v = _parse_int(raw)
            if v is None or v < 0:
                raise bad_request(f"INVALID_{param.upper()}", f"Invalid {param} parameter")
            bounds.append(v)
        lo, hi = bounds
        if lo is not None and hi is not None and lo > hi:
            raise bad_request(rf.range_code, f"{rf.min_param} cannot be greater than {rf.max_param}")
        if lo is not None or hi is not None:
            ranges[rf.column] = (lo, hi)

    search = _raw(params, "search")

    return ListQuery(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        filters=filters,
        ranges=ranges,
    )
