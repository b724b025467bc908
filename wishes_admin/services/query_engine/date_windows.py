"""Date keywords used by list and export screens.

One canonical set of keywords is accepted everywhere: ``today``, a specific
``DD/MM/YYYY`` day, ``this-month``, ``last-month`` and ``all-time``. Each one
resolves to an inclusive [start, end] window in UTC and to the label used in
export file names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from .errors import InvalidFilter

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
ALL_TIME_LABEL = "All-Time"

_DAY_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


@dataclass(frozen=True)
class DateWindow:
    start: datetime | None
    end: datetime | None
    label: str

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_end(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def day_label(day: date) -> str:
    return f"{day.day:02d}-{MONTH_ABBR[day.month - 1]}-{day.year}"


def month_label(day: date) -> str:
    return f"{MONTH_ABBR[day.month - 1]}-{day.year}"


def parse_day(text: str, field: str = "filter") -> date | None:
    """DD/MM/YYYY -> date; None when the text is not in that shape at all."""
    match = _DAY_RE.fullmatch(text)
    if match is None:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidFilter(field, f'"{text}" is not a valid DD/MM/YYYY date')


def _month_window(first: date) -> DateWindow:
    if first.month == 12:
        next_first = date(first.year + 1, 1, 1)
    else:
        next_first = date(first.year, first.month + 1, 1)
    return DateWindow(
        start=day_start(first),
        end=day_end(next_first - timedelta(days=1)),
        label=month_label(first),
    )


def resolve_date_keyword(keyword: str, *, now: datetime | None = None) -> DateWindow:
    text = str(keyword or "").strip().lower()
    today = (now or _utcnow()).astimezone(timezone.utc).date()

    specific = parse_day(text)
    if specific is not None:
        return DateWindow(start=day_start(specific), end=day_end(specific), label=day_label(specific))
    if text == "today":
        return DateWindow(start=day_start(today), end=day_end(today), label=day_label(today))
    if text == "this-month":
        return _month_window(today.replace(day=1))
    if text == "last-month":
        last_month_end = today.replace(day=1) - timedelta(days=1)
        return _month_window(last_month_end.replace(day=1))
    if text == "all-time":
        return DateWindow(start=None, end=None, label=ALL_TIME_LABEL)
    raise InvalidFilter(
        "filter",
        f'unknown date filter "{keyword}"; use today, DD/MM/YYYY, this-month, last-month or all-time',
    )


def range_label(start: datetime | None, end: datetime | None) -> str:
    """Label for an explicit startDate/endDate pair."""
    if start is None and end is None:
        return ALL_TIME_LABEL
    left = day_label(start.date()) if start is not None else "Start"
    right = day_label(end.date()) if end is not None else "Now"
    if left == right:
        return left
    return f"{left}_to_{right}"


def export_filename(entity: str, label: str, *, now: datetime | None = None) -> str:
    exported_on = (now or _utcnow()).astimezone(timezone.utc)
    return f"{entity}-{label}-{exported_on:%d%m%Y}.csv"
