"""Store-independent filter conditions.

Builders produce these values; each store adapter translates them into its
own query language (SQLAlchemy clauses, MongoDB filter documents).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class Regex:
    """Case-insensitive match of a literal fragment anywhere in the field."""

    field: str
    fragment: str


@dataclass(frozen=True)
class Range:
    """start <= field <= end; a missing bound leaves that side open."""

    field: str
    start: Any = None
    end: Any = None


@dataclass(frozen=True)
class And:
    items: tuple = ()


@dataclass(frozen=True)
class Or:
    items: tuple = ()


Predicate = Union[Equals, Regex, Range, And, Or]

MATCH_ALL = And(())


def all_of(*parts: Predicate | None) -> Predicate:
    items = []
    for part in parts:
        if part is None or part == MATCH_ALL:
            continue
        if isinstance(part, And):
            items.extend(part.items)
        else:
            items.append(part)
    if len(items) == 1:
        return items[0]
    return And(tuple(items))


def any_of(*parts: Predicate) -> Predicate:
    items = tuple(part for part in parts if part is not None)
    if len(items) == 1:
        return items[0]
    return Or(items)
