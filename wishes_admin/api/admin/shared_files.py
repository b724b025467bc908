from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from wishes_admin.api.admin.listing import collection_for, csv_response, get_or_404, listing_params
from wishes_admin.core.deps import READ_ROLES, WRITE_ROLES, require_role
from wishes_admin.db.session import get_db
from wishes_admin.models.shared_file import SharedFile
from wishes_admin.schemas.admin import SharedFileUpdate
from wishes_admin.services.listing import (
    ChoiceFilter,
    ListingParams,
    ListingProfile,
    collection_stats,
    export_rows,
    list_page,
)
from wishes_admin.services.rows import public_row

router = APIRouter()

NOT_FOUND = "File not found"

# Only metadata is managed here; the bytes live in external storage.
PROFILE = ListingProfile(
    entity="files",
    search_fields=("file_name", "original_name", "description", "owner"),
    sort_fields=("created_at", "file_name", "original_name", "size", "mime_type", "owner"),
    export_fields=("id", "file_name", "original_name", "mime_type", "size", "owner", "description", "created_at"),
    choice_filters=(
        ChoiceFilter("owner", "owner"),
        ChoiceFilter("mimeType", "mime_type"),
    ),
    stats_groups=("mime_type",),
    stats_sums=("size",),
)


@router.get("")
def list_files(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    return list_page(collection_for(db, SharedFile), PROFILE, params, request.query_params).model_dump(by_alias=True)


@router.get("/stats")
def file_stats(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    stats = collection_stats(collection_for(db, SharedFile), PROFILE, params, request.query_params)
    return {
        "total": stats.total,
        "totalSize": int(stats.sums.get("size", 0)),
        "averageSize": stats.averages.get("size", 0.0),
        "byMimeType": [group.model_dump() for group in stats.groups.get("mime_type", [])],
    }


@router.get("/export")
def export_files(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    body, filename = export_rows(collection_for(db, SharedFile), PROFILE, params, request.query_params)
    return csv_response(body, filename)


@router.get("/{id}")
def get_file(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    return public_row(get_or_404(db, SharedFile, id, NOT_FOUND))


@router.put("/{id}")
def update_file(
    id: str,
    payload: SharedFileUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_role(*WRITE_ROLES)),
):
    row = get_or_404(db, SharedFile, id, NOT_FOUND)
    row.description = payload.description
    db.add(row)
    db.commit()
    db.refresh(row)
    return public_row(row)


@router.delete("/{id}")
def delete_file(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = get_or_404(db, SharedFile, id, NOT_FOUND)
    db.delete(row)
    db.commit()
    return {"status": "deleted", "id": id}
