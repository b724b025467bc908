from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from wishes_admin.api.admin.listing import collection_for, csv_response, get_or_404, listing_params
from wishes_admin.core.deps import require_role
from wishes_admin.db.session import get_db
from wishes_admin.models.admin_user import ADMIN_ROLES, AdminUser, default_user_settings
from wishes_admin.schemas.admin import AdminUserUpdate
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

NOT_FOUND = "User not found"


def merge_settings(current: dict | None, changes: dict) -> dict:
    """Apply a partial settings update; notification flags merge key by key."""
    merged = default_user_settings()
    stored = current or {}
    if stored.get("theme") in ("light", "dark"):
        merged["theme"] = stored["theme"]
    merged["notifications"].update(
        {key: value for key, value in (stored.get("notifications") or {}).items() if key in merged["notifications"]}
    )
    if "theme" in changes:
        merged["theme"] = changes["theme"]
    merged["notifications"].update(changes.get("notifications") or {})
    return merged

PROFILE = ListingProfile(
    entity="users",
    search_fields=("name", "email"),
    sort_fields=("created_at", "name", "email", "role", "last_login_at", "is_active"),
    export_fields=(
        "id",
        "name",
        "email",
        "role",
        "is_active",
        "last_login_at",
        "settings.theme",
        "settings.notifications.email",
        "settings.notifications.push",
        "created_at",
    ),
    flag_filters=(FlagFilter("status", "is_active"),),
    choice_filters=(ChoiceFilter("role", "role", ADMIN_ROLES),),
    stats_flags=("is_active",),
    stats_groups=("role",),
)


@router.get("")
def list_users(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role("admin")),
):
    return list_page(collection_for(db, AdminUser), PROFILE, params, request.query_params).model_dump(by_alias=True)


@router.get("/stats")
def user_stats(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role("admin")),
):
    stats = collection_stats(collection_for(db, AdminUser), PROFILE, params, request.query_params)
    flags = stats.flags.get("is_active")
    return {
        "total": stats.total,
        "active": flags.true if flags else 0,
        "inactive": flags.false if flags else 0,
        "byRole": [group.model_dump() for group in stats.groups.get("role", [])],
    }


@router.get("/export")
def export_users(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role("admin")),
):
    body, filename = export_rows(collection_for(db, AdminUser), PROFILE, params, request.query_params)
    return csv_response(body, filename)


@router.get("/{id}")
def get_user(id: str, db: Session = Depends(get_db), admin=Depends(require_role("admin"))):
    return public_row(get_or_404(db, AdminUser, id, NOT_FOUND))


@router.put("/{id}")
def update_user(
    id: str,
    payload: AdminUserUpdate,
    db: Session = Depends(get_db),
    admin=Depends(require_role("admin")),
):
    row = get_or_404(db, AdminUser, id, NOT_FOUND)
    changes = payload.model_dump(exclude_none=True)
    if str(row.id) == str(admin.get("sub")) and (changes.get("role", "admin") != "admin" or changes.get("is_active") is False):
        raise HTTPException(status_code=400, detail="You cannot demote or deactivate your own account")
    if "settings" in changes:
        row.settings = merge_settings(row.settings, changes.pop("settings"))
    for key, value in changes.items():
        setattr(row, key, value)
    db.add(row)
    db.commit()
    db.refresh(row)
    return public_row(row)


@router.delete("/{id}")
def delete_user(id: str, db: Session = Depends(get_db), admin=Depends(require_role("admin"))):
    row = get_or_404(db, AdminUser, id, NOT_FOUND)
    if str(row.id) == str(admin.get("sub")):
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    db.delete(row)
    db.commit()
    return {"status": "deleted", "id": id}
