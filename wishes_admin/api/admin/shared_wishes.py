import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from wishes_admin.api.admin.listing import (
    collection_for,
    commit_or_409,
    csv_response,
    get_or_404,
    listing_params,
)
from wishes_admin.core.deps import READ_ROLES, WRITE_ROLES, require_role
from wishes_admin.db.session import get_db
from wishes_admin.models.shared_wish import WISH_STATUSES, SharedWish
from wishes_admin.models.template import Template
from wishes_admin.schemas.admin import SharedWishCreate, SharedWishUpdate
from wishes_admin.services import wish_analytics
from wishes_admin.services.listing import (
    ChoiceFilter,
    ListingParams,
    ListingProfile,
    build_predicate,
    collection_stats,
    coerce_uuid,
    export_rows,
    list_page,
)
from wishes_admin.services.query_engine.stats import daily_series
from wishes_admin.services.rows import public_row

router = APIRouter()

NOT_FOUND = "Shared wish not found"

PROFILE = ListingProfile(
    entity="shared-wishes",
    search_fields=("recipient_name", "recipient_email", "sender_name", "sender_email", "short_code"),
    sort_fields=("created_at", "views", "status", "recipient_name", "sender_name", "last_viewed_at"),
    export_fields=(
        "short_code",
        "template.title",
        "template.category",
        "recipient_name",
        "recipient_email",
        "sender_name",
        "sender_email",
        "message",
        "views",
        "status",
        "created_at",
        "last_viewed_at",
    ),
    choice_filters=(
        ChoiceFilter("status", "status", WISH_STATUSES),
        ChoiceFilter("templateId", "template_id", coerce=coerce_uuid),
    ),
    stats_groups=("status",),
    stats_sums=("views",),
)


def new_short_code() -> str:
    return uuid.uuid4().hex[-6:].upper()


@router.get("")
def list_wishes(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    return list_page(collection_for(db, SharedWish), PROFILE, params, request.query_params).model_dump(by_alias=True)


@router.get("/stats")
def wish_stats(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    collection = collection_for(db, SharedWish)
    stats = collection_stats(collection, PROFILE, params, request.query_params)
    predicate, label = build_predicate(PROFILE, params, request.query_params)
    return {
        "total": stats.total,
        "label": label,
        "byStatus": [group.model_dump() for group in stats.groups.get("status", [])],
        "totalViews": int(stats.sums.get("views", 0)),
        "averageViews": stats.averages.get("views", 0.0),
        "topWish": wish_analytics.top_wish(collection, predicate) if stats.total else None,
        "trend": [point.model_dump() for point in daily_series(collection, predicate, sum_field="views")],
    }


@router.get("/analytics")
def wish_analytics_view(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    collection = collection_for(db, SharedWish)
    stats = collection_stats(collection, PROFILE, params, request.query_params)
    predicate, _ = build_predicate(PROFILE, params, request.query_params)
    return {
        "totalWishes": stats.total,
        "totalViews": int(stats.sums.get("views", 0)),
        "avgViews": stats.averages.get("views", 0.0),
        "categoryDistribution": wish_analytics.category_distribution(collection, predicate),
    }


@router.get("/trending-templates")
def trending_templates(
    days: str | None = Query(None),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    window = wish_analytics.clamp_days(days)
    rows = wish_analytics.trending_templates(collection_for(db, SharedWish), window)
    return {"days": window, "items": rows}


@router.get("/export")
def export_wishes(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    collection = collection_for(db, SharedWish)
    body, filename = export_rows(
        collection,
        PROFILE,
        params,
        request.query_params,
        enrich=lambda records: wish_analytics.attach_templates(collection, records),
    )
    return csv_response(body, filename)


@router.get("/{id}")
def get_wish(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    row = public_row(get_or_404(db, SharedWish, id, NOT_FOUND))
    return wish_analytics.attach_templates(collection_for(db, SharedWish), [row])[0]


@router.post("", status_code=201)
def create_wish(payload: SharedWishCreate, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    data = payload.model_dump()
    template_id = data.pop("template_id")
    if template_id:
        try:
            template_key = uuid.UUID(template_id)
        except ValueError:
            raise HTTPException(status_code=400, detail="template_id is not a valid id")
        if db.get(Template, template_key) is None:
            raise HTTPException(status_code=400, detail="Template not found")
        data["template_id"] = template_key
    row = SharedWish(short_code=new_short_code(), **data)
    db.add(row)
    commit_or_409(db, "Short code collision, retry the request")
    db.refresh(row)
    return public_row(row)


@router.put("/{id}")
def update_wish(
    id: str,
    payload: SharedWishUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_role(*WRITE_ROLES)),
):
    row = get_or_404(db, SharedWish, id, NOT_FOUND)
    for key, value in payload.model_dump(exclude_none=True).items():
        setattr(row, key, value)
    db.add(row)
    db.commit()
    db.refresh(row)
    return public_row(row)


@router.delete("/{id}")
def delete_wish(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = get_or_404(db, SharedWish, id, NOT_FOUND)
    db.delete(row)
    db.commit()
    return {"status": "deleted", "id": id}
