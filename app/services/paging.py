"""Paged listing: keyword filter, whitelisted sort, bounded window and total count."""

import math
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from app.core.errors import ValidationError
from app.schemas.common import PagedData, PagedQuery, PageMeta

SORT_DIRECTIONS = ("asc", "desc")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def parse_sort(
    sort: str,
    sortable: Mapping[str, ColumnElement[Any]],
) -> ColumnElement[Any] | None:
    """
    Turn "<column>" or "<column> asc|desc" into an ORDER BY clause.

    Only columns named in ``sortable`` are accepted; anything else raises
    ValidationError. An empty string returns None (caller's default order).
    """
    parts = (sort or "").split()
    if not parts:
        return None
    if len(parts) > 2:
        raise ValidationError(f"Invalid sort expression: {sort!r}")
    column_name = parts[0].lower()
    direction = parts[1].lower() if len(parts) == 2 else "asc"
    if direction not in SORT_DIRECTIONS:
        raise ValidationError(f"Sort direction must be one of {list(SORT_DIRECTIONS)}")
    column = sortable.get(column_name)
    if column is None:
        raise ValidationError(
            f"Cannot sort by {column_name!r}; allowed: {sorted(sortable)}"
        )
    return column.desc() if direction == "desc" else column.asc()


def resolve_page(
    query: Query,
    params: PagedQuery,
    search_column: ColumnElement[Any],
    sortable: Mapping[str, ColumnElement[Any]],
    default_sort: ColumnElement[Any],
) -> tuple[list[Any], int]:
    """
    Apply keywords/sort/limit/offset to ``query``.

    Returns (rows, total) where total counts every row matching the keyword
    filter, ignoring limit and offset. limit <= 0 and negative offsets are
    rejected rather than treated as "everything".
    """
    if params.limit <= 0:
        raise ValidationError("limit must be greater than 0")
    if params.offset < 0:
        raise ValidationError("offset must not be negative")

    order = parse_sort(params.sort, sortable)

    if params.keywords:
        pattern = f"%{_escape_like(params.keywords)}%"
        query = query.filter(search_column.ilike(pattern, escape="\\"))

    total = query.order_by(None).count()
    rows = (
        query.order_by(order if order is not None else default_sort)
        .limit(params.limit)
        .offset(params.offset)
        .all()
    )
    return rows, total


def page_number(offset: int, limit: int) -> int:
    """1-based page containing row ``offset``."""
    if limit <= 0:
        raise ValidationError("limit must be greater than 0")
    return math.ceil((offset + 1) / limit)


def page_data(items: list[Any], total: int, offset: int, limit: int) -> PagedData:
    """Wrap a page of items as {list, meta: {per_page, page, total}}."""
    return PagedData(
        items=items,
        meta=PageMeta(per_page=limit, page=page_number(offset, limit), total=total),
    )
