from fastapi import APIRouter, Depends, Request
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
from wishes_admin.models.template import Template
from wishes_admin.schemas.admin import TemplateBulkImport, TemplatePatch, TemplateStatusUpdate, TemplateUpsert
from wishes_admin.services.listing import (
    ChoiceFilter,
    FlagFilter,
    ListingParams,
    ListingProfile,
    collection_stats,
    export_rows,
    list_page,
)
from wishes_admin.services.rows import public_row

router = APIRouter()

NOT_FOUND = "Template not found"

PROFILE = ListingProfile(
    entity="templates",
    search_fields=("title", "category"),
    sort_fields=("created_at", "updated_at", "title", "category", "is_active"),
    export_fields=("id", "title", "category", "tags", "is_active", "preview_url", "created_at", "updated_at"),
    flag_filters=(FlagFilter("status", "is_active"),),
    choice_filters=(ChoiceFilter("category", "category"),),
    stats_flags=("is_active",),
    stats_groups=("category",),
)


@router.get("")
def list_templates(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    page = list_page(collection_for(db, Template), PROFILE, params, request.query_params)
    return page.model_dump(by_alias=True)


@router.get("/categories")
def list_categories(db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    rows = db.query(Template.category).distinct().order_by(Template.category.asc()).all()
    return {"categories": [category for (category,) in rows if category]}


@router.get("/stats")
def template_stats(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    stats = collection_stats(collection_for(db, Template), PROFILE, params, request.query_params)
    flags = stats.flags.get("is_active")
    return {
        "total": stats.total,
        "active": flags.true if flags else 0,
        "inactive": flags.false if flags else 0,
        "byCategory": [group.model_dump() for group in stats.groups.get("category", [])],
    }


@router.get("/export")
def export_templates(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    body, filename = export_rows(collection_for(db, Template), PROFILE, params, request.query_params)
    return csv_response(body, filename)


@router.post("/bulk-import", status_code=201)
def bulk_import_templates(
    payload: TemplateBulkImport,
    db: Session = Depends(get_db),
    admin=Depends(require_role(*WRITE_ROLES)),
):
    rows = [Template(**item.model_dump()) for item in payload.templates]
    db.add_all(rows)
    commit_or_409(db, "Templates could not be imported")
    return {"imported": len(rows), "ids": [str(row.id) for row in rows]}


@router.get("/{id}")
def get_template(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    return public_row(get_or_404(db, Template, id, NOT_FOUND))


@router.post("", status_code=201)
def create_template(payload: TemplateUpsert, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = Template(**payload.model_dump())
    db.add(row)
    commit_or_409(db, "Template could not be saved")
    db.refresh(row)
    return public_row(row)


@router.put("/{id}")
def update_template(
    id: str,
    payload: TemplatePatch,
    db: Session = Depends(get_db),
    admin=Depends(require_role(*WRITE_ROLES)),
):
    row = get_or_404(db, Template, id, NOT_FOUND)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key != "preview_url":
            continue
        setattr(row, key, value)
    db.add(row)
    commit_or_409(db, "Template could not be saved")
    db.refresh(row)
    return public_row(row)


@router.patch("/{id}/status")
def set_template_status(
    id: str,
    payload: TemplateStatusUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_role(*WRITE_ROLES)),
):
    row = get_or_404(db, Template, id, NOT_FOUND)
    row.is_active = payload.is_active
    db.add(row)
    db.commit()
    return {"id": str(row.id), "is_active": row.is_active}


@router.delete("/{id}")
def delete_template(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = get_or_404(db, Template, id, NOT_FOUND)
    db.delete(row)
    db.commit()
    return {"status": "deleted", "id": id}
