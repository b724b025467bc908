"""Page requests and paged reads.

Page and page size are clamped into range rather than rejected; an unknown
sort field or order is rejected. ``paginate`` counts and then fetches
without a transaction, so a write landing between the two calls can shift
the page by one record. Callers treat ``total`` as best effort.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from wishes_admin.schemas.listing import PageRequest, PageResult

from .collection import Collection
from .errors import InvalidPageRequest
from .predicates import Predicate

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")


def clamp_page(page: Any) -> int:
    try:
        value = int(page)
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def clamp_page_size(page_size: Any, *, default: int, maximum: int) -> int:
    if page_size is None:
        value = default
    else:
        try:
            value = int(page_size)
        except (TypeError, ValueError):
            value = default
    return min(max(1, value), max(1, maximum))


def build_page_request(
    *,
    page: Any = 1,
    page_size: Any = None,
    sort: str | None = None,
    order: str | None = None,
    sort_fields: Iterable[str],
    default_sort: str = "created_at",
    default_order: str = "desc",
    default_page_size: int = 10,
    max_page_size: int = 100,
) -> PageRequest:
    allowed = tuple(sort_fields)
    sort_field = (sort or "").strip() or default_sort
    if sort_field not in allowed:
        logger.warning("rejected sort field %r, allowed=%s", sort_field, allowed)
        raise InvalidPageRequest("sort", f'cannot sort by "{sort_field}"; use one of: {", ".join(allowed)}')
    sort_order = (order or "").strip().lower() or default_order
    if sort_order not in SORT_ORDERS:
        raise InvalidPageRequest("order", f'"{order}" is not a sort order; use asc or desc')
    return PageRequest(
        page=clamp_page(page),
        page_size=clamp_page_size(page_size, default=default_page_size, maximum=max_page_size),
        sort_field=sort_field,
        sort_order=sort_order,
    )


def paginate(collection: Collection, predicate: Predicate, page_request: PageRequest) -> PageResult:
    total = collection.count(predicate)
    items: list[dict[str, Any]] = []
    if page_request.offset < total:
        items = collection.find(
            predicate,
            sort_field=page_request.sort_field,
            descending=page_request.sort_order == "desc",
            skip=page_request.offset,
            limit=page_request.page_size,
        )
    return PageResult(
        items=items,
        total=total,
        page=page_request.page,
        page_size=page_request.page_size,
    )
