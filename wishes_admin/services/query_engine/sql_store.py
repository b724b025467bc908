from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Callable

from sqlalchemy import and_, asc, desc, false, func, or_, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wishes_admin.services.rows import row_to_dict

from .errors import InvalidFilter, StoreUnavailable
from .predicates import And, Equals, Or, Predicate, Range, Regex

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def _escape_like(fragment: str) -> str:
    return (
        fragment.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _json_element(element, value: Any):
    if isinstance(value, bool):
        return element.as_boolean()
    if isinstance(value, (int, float)):
        return element.as_float()
    return element.as_string()


class SqlCollection:
    """Collection adapter over one SQLAlchemy model.

    Dotted field paths address keys inside JSON columns (``settings.theme``).
    """

    def __init__(
        self,
        db: Session,
        model: type,
        *,
        name: str | None = None,
        serialize: Callable[[Any], dict[str, Any]] = row_to_dict,
    ) -> None:
        self.db = db
        self.model = model
        self.name = name or model.__tablename__
        self.serialize = serialize

    def _attribute(self, path: str):
        head, _, rest = path.partition(".")
        column = self.model.__table__.columns.get(head)
        if column is None:
            raise InvalidFilter(path, f'unknown field for "{self.name}"')
        attribute = getattr(self.model, head)
        if not rest:
            return attribute
        return attribute[tuple(rest.split("."))]

    def _operand(self, path: str, sample: Any):
        attribute = self._attribute(path)
        if "." in path:
            return _json_element(attribute, sample)
        return attribute

    def compile(self, predicate: Predicate):
        if isinstance(predicate, Equals):
            column = self._operand(predicate.field, predicate.value)
            if predicate.value is None:
                return column.is_(None)
            return column == predicate.value
        if isinstance(predicate, Regex):
            column = self._operand(predicate.field, "")
            return column.ilike(f"%{_escape_like(predicate.fragment)}%", escape=_LIKE_ESCAPE)
        if isinstance(predicate, Range):
            column = self._operand(predicate.field, predicate.start if predicate.start is not None else predicate.end)
            bounds = []
            if predicate.start is not None:
                bounds.append(column >= predicate.start)
            if predicate.end is not None:
                bounds.append(column <= predicate.end)
            return and_(true(), *bounds)
        if isinstance(predicate, And):
            return and_(true(), *(self.compile(item) for item in predicate.items))
        if isinstance(predicate, Or):
            return or_(false(), *(self.compile(item) for item in predicate.items))
        raise TypeError(f"unsupported predicate: {predicate!r}")

    @contextmanager
    def guard(self, operation: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("store read failed: collection=%s operation=%s", self.name, operation)
            raise StoreUnavailable(self.name, operation) from exc

    def count(self, predicate: Predicate) -> int:
        clause = self.compile(predicate)
        with self.guard("count"):
            return int(self.db.query(func.count(self.model.id)).filter(clause).scalar() or 0)

    def find(
        self,
        predicate: Predicate,
        *,
        sort_field: str,
        descending: bool,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        clause = self.compile(predicate)
        direction = desc if descending else asc
        # id as a tie-breaker keeps page boundaries stable for equal sort keys
        q = (
            self.db.query(self.model)
            .filter(clause)
            .order_by(direction(self._attribute(sort_field)), direction(self.model.id))
        )
        if skip:
            q = q.offset(skip)
        if limit is not None:
            q = q.limit(limit)
        with self.guard("find"):
            rows = q.all()
        return [self.serialize(row) for row in rows]

    def group_counts(self, predicate: Predicate, field: str) -> list[tuple[Any, int]]:
        clause = self.compile(predicate)
        column = self._attribute(field)
        with self.guard("group_counts"):
            rows = (
                self.db.query(column, func.count(self.model.id))
                .filter(clause)
                .group_by(column)
                .all()
            )
        return [(key, int(count)) for key, count in rows]

    def sum(self, predicate: Predicate, field: str) -> float:
        clause = self.compile(predicate)
        column = self._attribute(field)
        with self.guard("sum"):
            value = (
                self.db.query(func.coalesce(func.sum(func.coalesce(column, 0)), 0))
                .filter(clause)
                .scalar()
            )
        return float(value or 0)

    def daily_counts(
        self,
        predicate: Predicate,
        timestamp_field: str,
        sum_field: str | None = None,
    ) -> list[tuple[str, int, float]]:
        clause = self.compile(predicate)
        day = func.date(self._attribute(timestamp_field))
        total = func.coalesce(func.sum(func.coalesce(self._attribute(sum_field), 0)), 0) if sum_field else func.sum(0)
        with self.guard("daily_counts"):
            rows = (
                self.db.query(day, func.count(self.model.id), total)
                .filter(clause)
                .group_by(day)
                .order_by(day)
                .all()
            )
        series = []
        for key, count, amount in rows:
            if key is None:
                continue
            label = key.isoformat() if isinstance(key, date) else str(key)[:10]
            series.append((label, int(count), float(amount or 0)))
        return series
