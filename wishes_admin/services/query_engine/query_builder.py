from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterable

from wishes_admin.schemas.listing import FilterSpec

from .date_windows import day_end, day_start, parse_day
from .errors import InvalidFilter
from .predicates import MATCH_ALL, Equals, Predicate, Range, Regex, all_of, any_of

TRUE_VALUES = {"1", "true", "yes"}
FALSE_VALUES = {"0", "false", "no"}


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_bool(field: str, value: Any) -> bool | None:
    """Query-string flag -> True/False, or None when the parameter is absent."""
    if isinstance(value, bool):
        return value
    if _is_unset(value):
        return None
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise InvalidFilter(field, f'"{value}" is not a boolean; use true or false')


def coerce_choice(field: str, value: Any, choices: Iterable[str] | None = None) -> str | None:
    if _is_unset(value):
        return None
    text = str(value).strip()
    if choices is None:
        return text
    allowed = tuple(choices)
    normalized = text.lower()
    if normalized not in allowed:
        raise InvalidFilter(field, f'"{value}" is not one of: {", ".join(allowed)}')
    return normalized


def coerce_datetime(field: str, value: Any, *, end_of_day: bool = False) -> datetime | None:
    """ISO date/datetime or DD/MM/YYYY -> aware UTC datetime.

    A date without a time means the whole day: its first instant for a lower
    bound, its last instant when ``end_of_day`` is set.
    """
    if _is_unset(value):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = day_end(value) if end_of_day else day_start(value)
    else:
        text = str(value).strip()
        day = parse_day(text, field)
        if day is None and "T" not in text and " " not in text and len(text) == 10:
            try:
                day = date.fromisoformat(text)
            except ValueError:
                raise InvalidFilter(field, f'"{value}" is not a valid date')
        if day is not None:
            parsed = day_end(day) if end_of_day else day_start(day)
        else:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                raise InvalidFilter(field, f'"{value}" is not a valid date')
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build(spec: FilterSpec) -> Predicate:
    conditions: list[Predicate] = []

    search = (spec.search or "").strip()
    if search and spec.search_fields:
        conditions.append(any_of(*(Regex(field, search) for field in spec.search_fields)))

    for field, value in spec.equals.items():
        if value is None:
            continue
        conditions.append(Equals(field, value))

    window = spec.date_range
    if window is not None and (window.start is not None or window.end is not None):
        if window.start is not None and window.end is not None and window.start > window.end:
            raise InvalidFilter("startDate", "startDate must not be after endDate")
        conditions.append(Range(window.field, window.start, window.end))

    if not conditions:
        return MATCH_ALL
    return all_of(*conditions)
