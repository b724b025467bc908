"""Shared-wish analytics that need the templates table alongside the wishes."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import func

from wishes_admin.models.shared_wish import SharedWish
from wishes_admin.models.template import Template
from wishes_admin.services.query_engine.date_windows import day_start
from wishes_admin.services.query_engine.predicates import Predicate, Range
from wishes_admin.services.query_engine.sql_store import SqlCollection
from wishes_admin.services.query_engine.stats import safe_average

TRENDING_LIMIT = 5
MAX_TRENDING_DAYS = 365


def top_wish(collection: SqlCollection, predicate: Predicate) -> dict[str, Any] | None:
    rows = collection.find(predicate, sort_field="views", descending=True, limit=1)
    if not rows:
        return None
    row = rows[0]
    return {
        "id": row["id"],
        "shortCode": row.get("short_code"),
        "recipientName": row.get("recipient_name"),
        "views": row.get("views") or 0,
    }


def category_distribution(collection: SqlCollection, predicate: Predicate) -> list[dict[str, Any]]:
    """Wish count and views per template category; wishes without a template are skipped."""
    db = collection.db
    views = func.coalesce(func.sum(func.coalesce(SharedWish.views, 0)), 0)
    shares = func.count(SharedWish.id)
    with collection.guard("category_distribution"):
        rows = (
            db.query(Template.category, shares, views)
            .select_from(SharedWish)
            .join(Template, Template.id == SharedWish.template_id)
            .filter(collection.compile(predicate))
            .group_by(Template.category)
            .order_by(shares.desc(), Template.category.asc())
            .all()
        )
    return [
        {
            "category": category,
            "count": int(count),
            "views": int(total_views or 0),
            "avgViews": safe_average(total_views or 0, int(count)),
        }
        for category, count, total_views in rows
    ]


def clamp_days(days: Any, default: int = 7) -> int:
    try:
        value = int(days)
    except (TypeError, ValueError):
        return default
    return min(max(1, value), MAX_TRENDING_DAYS)


def trending_templates(
    collection: SqlCollection,
    days: int,
    *,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    today = (now or datetime.now(timezone.utc)).astimezone(timezone.utc).date()
    since = day_start(today - timedelta(days=days))
    db = collection.db
    shares = func.count(SharedWish.id)
    views = func.coalesce(func.sum(func.coalesce(SharedWish.views, 0)), 0)
    with collection.guard("trending_templates"):
        rows = (
            db.query(Template.id, Template.title, Template.category, Template.preview_url, shares, views)
            .select_from(SharedWish)
            .join(Template, Template.id == SharedWish.template_id)
            .filter(collection.compile(Range("created_at", since, None)))
            .group_by(Template.id, Template.title, Template.category, Template.preview_url)
            .order_by(shares.desc(), Template.title.asc())
            .limit(TRENDING_LIMIT)
            .all()
        )
    return [
        {
            "templateId": str(template_id),
            "templateTitle": title,
            "templateCategory": category,
            "previewUrl": preview_url,
            "totalShares": int(count),
            "totalViews": int(total_views or 0),
            "averageViews": safe_average(total_views or 0, int(count)),
        }
        for template_id, title, category, preview_url, count, total_views in rows
    ]


def attach_templates(collection: SqlCollection, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Nest ``template: {title, category}`` into each wish record for export."""
    ids = {record.get("template_id") for record in records if record.get("template_id")}
    if not ids:
        return records
    lookup = {}
    keys = [uuid.UUID(str(value)) for value in ids]
    with collection.guard("attach_templates"):
        templates = collection.db.query(Template).filter(Template.id.in_(keys)).all()
    for template in templates:
        lookup[str(template.id)] = {"title": template.title, "category": template.category}
    for record in records:
        record["template"] = lookup.get(str(record.get("template_id") or ""))
    return records
