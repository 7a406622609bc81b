"""Query-string binding for list endpoints."""
from __future__ import annotations

import uuid
from typing import Mapping

from reviewhub.config import get_settings
from reviewhub.exceptions import MalformedIdFilterError
from reviewhub.schemas import Filter, GetListFilter, OrderBy

DEFAULT_ORDER = (OrderBy(column="created_at", order="desc"),)

# Keeps page * limit inside a 64-bit OFFSET
MAX_PAGE = 1_000_000_000


def parse_positive_int(raw: str | None, default: int, maximum: int | None = None) -> int:
    """Parse a query integer; non-numeric input reads as 0, and anything below 1 falls back to `default`.

    Values above `maximum` are clamped to it.
    """
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        return default
    if maximum is not None:
        return min(value, maximum)
    return value


def is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def bind_list_filter(
    page: str | None,
    limit: str | None,
    *,
    id_filters: Mapping[str, str | None] | None = None,
    order_by: tuple[OrderBy, ...] = DEFAULT_ORDER,
) -> GetListFilter:
    """Build a GetListFilter from raw query values.

    `id_filters` maps a column to an optional id value: empty values are
    kept as no-op filters, non-empty ones must be UUIDs.
    """
    settings = get_settings()
    filters = []
    for column, value in (id_filters or {}).items():
        if value and not is_uuid(value):
            raise MalformedIdFilterError(column, value)
        filters.append(Filter(column=column, type="eq", value=value or ""))

    return GetListFilter(
        page=parse_positive_int(page, 1, MAX_PAGE),
        limit=parse_positive_int(limit, settings.default_page_size, settings.max_page_size),
        filters=filters,
        order_by=list(order_by),
    )
