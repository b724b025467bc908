from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable

from wishes_admin.schemas.listing import DailyCount, FlagCount, GroupCount, Stats

from .collection import Collection
from .predicates import Equals, Predicate, all_of


def safe_average(total: float, count: int, *, digits: int = 1) -> float:
    if not count:
        return 0.0
    return round(float(total) / count, digits)


def _group_sort_key(item: tuple[Any, int]) -> tuple[int, str]:
    key, count = item
    return (-count, "" if key is None else str(key))


def group_breakdown(collection: Collection, predicate: Predicate, field: str) -> list[GroupCount]:
    rows = sorted(collection.group_counts(predicate, field), key=_group_sort_key)
    return [GroupCount(key=key, count=count) for key, count in rows]


def aggregate(
    collection: Collection,
    predicate: Predicate,
    group_fields: Iterable[str] = (),
    *,
    flag_fields: Iterable[str] = (),
    sum_fields: Iterable[str] = (),
) -> Stats:
    """Totals, flag branches, groupings and sums under one filter."""
    total = collection.count(predicate)
    stats = Stats(total=total)
    if total == 0:
        # nothing matched: keep the requested keys so clients see zeros
        stats.flags = {field: FlagCount() for field in flag_fields}
        stats.groups = {field: [] for field in group_fields}
        stats.sums = {field: 0.0 for field in sum_fields}
        stats.averages = {field: 0.0 for field in stats.sums}
        return stats

    for field in flag_fields:
        stats.flags[field] = FlagCount(
            true=collection.count(all_of(predicate, Equals(field, True))),
            false=collection.count(all_of(predicate, Equals(field, False))),
        )
    for field in group_fields:
        stats.groups[field] = group_breakdown(collection, predicate, field)
    for field in sum_fields:
        amount = collection.sum(predicate, field)
        stats.sums[field] = amount
        stats.averages[field] = safe_average(amount, total)
    return stats


def daily_series(
    collection: Collection,
    predicate: Predicate,
    timestamp_field: str = "created_at",
    *,
    sum_field: str | None = None,
) -> list[DailyCount]:
    return [
        DailyCount(date=day, count=count, sum=amount)
        for day, count, amount in collection.daily_counts(predicate, timestamp_field, sum_field)
    ]


def fill_days(series: list[DailyCount], *, last_day: date, days: int) -> list[DailyCount]:
    """Dense ``days``-long series ending at ``last_day``; missing days are zero."""
    by_day = {item.date: item for item in series}
    filled = []
    for offset in range(days - 1, -1, -1):
        key = (last_day - timedelta(days=offset)).isoformat()
        filled.append(by_day.get(key) or DailyCount(date=key))
    return filled
