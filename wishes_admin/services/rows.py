from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import inspect as sa_inspect

# Columns that stay in the database but never leave the API.
HIDDEN_FIELDS: dict[str, set[str]] = {
    "shared_files": {"path"},
    "admin_users": {"password_hash"},
}


def serialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: serialize_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    return value


def row_to_dict(row: Any) -> dict[str, Any]:
    mapper = sa_inspect(type(row))
    return {column.key: serialize_value(getattr(row, column.key)) for column in mapper.columns}


def strip_hidden_fields(table_name: str, payload: dict[str, Any]) -> dict[str, Any]:
    hidden = HIDDEN_FIELDS.get(table_name)
    if not hidden:
        return payload
    return {k: v for k, v in payload.items() if k not in hidden}


def public_row(row: Any) -> dict[str, Any]:
    return strip_hidden_fields(row.__tablename__, row_to_dict(row))
