"""Collection adapter for the legacy MongoDB document store."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from .errors import StoreUnavailable
from .predicates import And, Equals, Or, Predicate, Range, Regex

logger = logging.getLogger(__name__)


def to_mongo_filter(predicate: Predicate) -> dict[str, Any]:
    if isinstance(predicate, Equals):
        return {predicate.field: predicate.value}
    if isinstance(predicate, Regex):
        return {predicate.field: {"$regex": re.escape(predicate.fragment), "$options": "i"}}
    if isinstance(predicate, Range):
        bounds: dict[str, Any] = {}
        if predicate.start is not None:
            bounds["$gte"] = predicate.start
        if predicate.end is not None:
            bounds["$lte"] = predicate.end
        return {predicate.field: bounds} if bounds else {}
    if isinstance(predicate, And):
        parts = [to_mongo_filter(item) for item in predicate.items]
        parts = [part for part in parts if part]
        if not parts:
            return {}
        if len(parts) == 1:
            return parts[0]
        return {"$and": parts}
    if isinstance(predicate, Or):
        parts = [to_mongo_filter(item) for item in predicate.items]
        if not parts:
            # an empty alternative matches nothing
            return {"_id": {"$exists": False}}
        if len(parts) == 1:
            return parts[0]
        return {"$or": parts}
    raise TypeError(f"unsupported predicate: {predicate!r}")


def document_to_record(document: dict[str, Any]) -> dict[str, Any]:
    record = dict(document)
    if "_id" in record:
        record["id"] = str(record.pop("_id"))
    record.pop("__v", None)
    return record


class MongoCollection:
    def __init__(self, collection: Any, *, name: str | None = None) -> None:
        self.collection = collection
        self.name = name or getattr(collection, "name", "collection")

    @contextmanager
    def guard(self, operation: str):
        try:
            yield
        except PyMongoError as exc:
            logger.exception("store read failed: collection=%s operation=%s", self.name, operation)
            raise StoreUnavailable(self.name, operation) from exc

    def count(self, predicate: Predicate) -> int:
        with self.guard("count"):
            return int(self.collection.count_documents(to_mongo_filter(predicate)))

    def find(
        self,
        predicate: Predicate,
        *,
        sort_field: str,
        descending: bool,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        direction = DESCENDING if descending else ASCENDING
        with self.guard("find"):
            cursor = self.collection.find(to_mongo_filter(predicate)).sort(
                [(sort_field, direction), ("_id", direction)]
            )
            if skip:
                cursor = cursor.skip(skip)
            if limit is not None:
                cursor = cursor.limit(limit)
            return [document_to_record(doc) for doc in cursor]

    def _aggregate(self, operation: str, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        with self.guard(operation):
            return list(self.collection.aggregate(pipeline))

    def group_counts(self, predicate: Predicate, field: str) -> list[tuple[Any, int]]:
        rows = self._aggregate(
            "group_counts",
            [
                {"$match": to_mongo_filter(predicate)},
                {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
            ],
        )
        return [(row.get("_id"), int(row.get("count") or 0)) for row in rows]

    def sum(self, predicate: Predicate, field: str) -> float:
        rows = self._aggregate(
            "sum",
            [
                {"$match": to_mongo_filter(predicate)},
                {"$group": {"_id": None, "total": {"$sum": {"$ifNull": [f"${field}", 0]}}}},
            ],
        )
        if not rows:
            return 0.0
        return float(rows[0].get("total") or 0)

    def daily_counts(
        self,
        predicate: Predicate,
        timestamp_field: str,
        sum_field: str | None = None,
    ) -> list[tuple[str, int, float]]:
        amount = {"$sum": {"$ifNull": [f"${sum_field}", 0]}} if sum_field else {"$sum": 0}
        rows = self._aggregate(
            "daily_counts",
            [
                {"$match": to_mongo_filter(predicate)},
                {
                    "$group": {
                        "_id": {"$dateToString": {"format": "%Y-%m-%d", "date": f"${timestamp_field}"}},
                        "count": {"$sum": 1},
                        "sum": amount,
                    }
                },
                {"$sort": {"_id": 1}},
            ],
        )
        return [
            (str(row["_id"]), int(row.get("count") or 0), float(row.get("sum") or 0))
            for row in rows
            if row.get("_id")
        ]
