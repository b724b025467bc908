from __future__ import annotations

from typing import Any, Protocol

from .predicates import Predicate


class Collection(Protocol):
    """What the engine needs from a store: counting, paged reads and grouping.

    Adapters raise ``StoreUnavailable`` when the driver fails and
    ``InvalidFilter`` when a predicate names a field they cannot address.
    """

    name: str

    def count(self, predicate: Predicate) -> int: ...

    def find(
        self,
        predicate: Predicate,
        *,
        sort_field: str,
        descending: bool,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]: ...

    def group_counts(self, predicate: Predicate, field: str) -> list[tuple[Any, int]]: ...

    def sum(self, predicate: Predicate, field: str) -> float: ...

    def daily_counts(
        self,
        predicate: Predicate,
        timestamp_field: str,
        sum_field: str | None = None,
    ) -> list[tuple[str, int, float]]: ...
