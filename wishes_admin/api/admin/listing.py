"""Shared plumbing for the admin list, stats and export routes."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from fastapi import HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wishes_admin.services.listing import ListingParams
from wishes_admin.services.query_engine.sql_store import SqlCollection
from wishes_admin.services.rows import public_row


def listing_params(
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    filter: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
) -> ListingParams:
    return ListingParams(
        page=page,
        limit=limit,
        search=search,
        sort=sort,
        order=order,
        filter=filter,
        start_date=start_date,
        end_date=end_date,
    )


def collection_for(db: Session, model: type) -> SqlCollection:
    return SqlCollection(db, model, serialize=public_row)


def csv_response(body: str, filename: str) -> Response:
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def get_or_404(db: Session, model: type, id: str, detail: str) -> Any:
    try:
        key = uuid.UUID(str(id))
    except ValueError:
        raise HTTPException(status_code=404, detail=detail)
    row = db.get(model, key)
    if row is None:
        raise HTTPException(status_code=404, detail=detail)
    return row


def commit_or_409(db: Session, detail: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=detail)
