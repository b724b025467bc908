from __future__ import annotations

import csv
import io
import json
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Sequence


def resolve_path(record: Mapping[str, Any], path: str) -> Any:
    """Nested lookup for ``a.b.c``; None as soon as a step is missing."""
    current: Any = record
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(cell_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


def export(records: Iterable[Mapping[str, Any]], fields: Sequence[str]) -> str:
    """CSV text: a verbatim header line, then one fully quoted row per record."""
    buffer = io.StringIO()
    buffer.write(",".join(fields) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow([cell_text(resolve_path(record, field)) for field in fields])
    return buffer.getvalue()
