"""List, stats and export pipeline shared by every admin collection.

Each collection declares a ``ListingProfile``: which fields free-text search
covers, which query parameters map to equality filters, what may be sorted
on and what goes into the CSV. Everything else (parameter coercion, paging,
stats and export) is the same code path for all of them.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from wishes_admin.core.config import settings
from wishes_admin.schemas.listing import DateRange, ExportSpec, FilterSpec, PageRequest, PageResult, Stats
from wishes_admin.services.query_engine import csv_export, paginator, query_builder, stats
from wishes_admin.services.query_engine.collection import Collection
from wishes_admin.services.query_engine.date_windows import (
    export_filename,
    range_label,
    resolve_date_keyword,
)
from wishes_admin.services.query_engine.errors import ExportTooLarge, InvalidFilter
from wishes_admin.services.query_engine.predicates import Predicate

logger = logging.getLogger(__name__)


def coerce_uuid(param: str, value: Any) -> uuid.UUID | None:
    if value is None or not str(value).strip():
        return None
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        raise InvalidFilter(param, f'"{value}" is not a valid id')


@dataclass(frozen=True)
class FlagFilter:
    param: str
    field: str


@dataclass(frozen=True)
class ChoiceFilter:
    param: str
    field: str
    choices: tuple[str, ...] | None = None
    coerce: Callable[[str, Any], Any] | None = None

    def parse(self, raw: Any) -> Any:
        if self.coerce is not None:
            return self.coerce(self.param, raw)
        return query_builder.coerce_choice(self.param, raw, self.choices)


@dataclass(frozen=True)
class ListingProfile:
    entity: str
    search_fields: tuple[str, ...]
    sort_fields: tuple[str, ...]
    export_fields: tuple[str, ...]
    flag_filters: tuple[FlagFilter, ...] = ()
    choice_filters: tuple[ChoiceFilter, ...] = ()
    timestamp_field: str = "created_at"
    default_sort: str = "created_at"
    default_order: str = "desc"
    stats_flags: tuple[str, ...] = ()
    stats_groups: tuple[str, ...] = ()
    stats_sums: tuple[str, ...] = ()


class ListingParams(BaseModel):
    page: int = 1
    limit: int | None = None
    search: str | None = None
    sort: str | None = None
    order: str | None = None
    filter: str | None = None
    start_date: str | None = None
    end_date: str | None = None


def resolve_date_range(
    profile: ListingProfile,
    params: ListingParams,
    *,
    default_keyword: str | None = None,
    now: datetime | None = None,
) -> tuple[DateRange | None, str]:
    """The active date window and its export label."""
    has_explicit = bool((params.start_date or "").strip() or (params.end_date or "").strip())
    keyword = (params.filter or "").strip()
    if keyword and has_explicit:
        raise InvalidFilter("filter", "use either filter or startDate/endDate, not both")
    if has_explicit:
        start = query_builder.coerce_datetime("startDate", params.start_date)
        end = query_builder.coerce_datetime("endDate", params.end_date, end_of_day=True)
        return DateRange(field=profile.timestamp_field, start=start, end=end), range_label(start, end)
    keyword = keyword or default_keyword or "all-time"
    window = resolve_date_keyword(keyword, now=now)
    if window.is_unbounded:
        return None, window.label
    return DateRange(field=profile.timestamp_field, start=window.start, end=window.end), window.label


def build_filter_spec(
    profile: ListingProfile,
    params: ListingParams,
    query: Mapping[str, Any],
    *,
    default_keyword: str | None = None,
    now: datetime | None = None,
) -> tuple[FilterSpec, str]:
    equals: dict[str, Any] = {}
    for flag in profile.flag_filters:
        equals[flag.field] = query_builder.coerce_bool(flag.param, query.get(flag.param))
    for choice in profile.choice_filters:
        equals[choice.field] = choice.parse(query.get(choice.param))
    date_range, label = resolve_date_range(profile, params, default_keyword=default_keyword, now=now)
    spec = FilterSpec(
        search_fields=profile.search_fields,
        search=params.search,
        equals=equals,
        date_range=date_range,
    )
    return spec, label


def build_predicate(
    profile: ListingProfile,
    params: ListingParams,
    query: Mapping[str, Any],
    *,
    default_keyword: str | None = None,
    now: datetime | None = None,
) -> tuple[Predicate, str]:
    spec, label = build_filter_spec(profile, params, query, default_keyword=default_keyword, now=now)
    return query_builder.build(spec), label


def build_page_request(profile: ListingProfile, params: ListingParams) -> PageRequest:
    return paginator.build_page_request(
        page=params.page,
        page_size=params.limit,
        sort=params.sort,
        order=params.order,
        sort_fields=profile.sort_fields,
        default_sort=profile.default_sort,
        default_order=profile.default_order,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )


def list_page(
    collection: Collection,
    profile: ListingProfile,
    params: ListingParams,
    query: Mapping[str, Any],
    *,
    default_keyword: str | None = None,
) -> PageResult:
    predicate, _ = build_predicate(profile, params, query, default_keyword=default_keyword)
    return paginator.paginate(collection, predicate, build_page_request(profile, params))


def collection_stats(
    collection: Collection,
    profile: ListingProfile,
    params: ListingParams,
    query: Mapping[str, Any],
    *,
    default_keyword: str | None = None,
) -> Stats:
    predicate, _ = build_predicate(profile, params, query, default_keyword=default_keyword)
    return stats.aggregate(
        collection,
        predicate,
        profile.stats_groups,
        flag_fields=profile.stats_flags,
        sum_fields=profile.stats_sums,
    )


def export_rows(
    collection: Collection,
    profile: ListingProfile,
    params: ListingParams,
    query: Mapping[str, Any],
    *,
    enrich: Callable[[list[dict[str, Any]]], list[dict[str, Any]]] | None = None,
    max_rows: int | None = None,
    now: datetime | None = None,
) -> tuple[str, str]:
    """CSV body and download file name for the filtered collection."""
    predicate, label = build_predicate(profile, params, query, now=now)
    limit = settings.EXPORT_MAX_ROWS if max_rows is None else max_rows
    total = collection.count(predicate)
    if total > limit:
        logger.warning("export refused: entity=%s rows=%s limit=%s", profile.entity, total, limit)
        raise ExportTooLarge(total, limit)
    page = build_page_request(profile, params)
    records = collection.find(
        predicate,
        sort_field=page.sort_field,
        descending=page.sort_order == "desc",
        limit=limit + 1,
    )
    if len(records) > limit:
        logger.warning("export refused after fetch: entity=%s limit=%s", profile.entity, limit)
        raise ExportTooLarge(max(total, len(records)), limit)
    if enrich is not None:
        records = enrich(records)
    spec = ExportSpec(entity=profile.entity, fields=profile.export_fields, filename_label=label)
    logger.info("export built: entity=%s rows=%s label=%s", spec.entity, len(records), spec.filename_label)
    body = csv_export.export(records, spec.fields)
    return body, export_filename(spec.entity, spec.filename_label, now=now)
