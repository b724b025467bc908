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
from wishes_admin.models.ad_unit import AD_PLATFORMS, AD_TYPES, AdUnit
from wishes_admin.schemas.admin import AdUnitUpsert
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

NOT_FOUND = "Ad unit not found"
DUPLICATE_CODE = "An ad unit with this code already exists"

AD_TYPE_LABELS = {
    "banner": "Banner",
    "interstitial": "Interstitial",
    "rewarded": "Rewarded",
}

PROFILE = ListingProfile(
    entity="ad-units",
    search_fields=("name", "ad_unit_code"),
    sort_fields=("created_at", "name", "ad_type", "platform", "is_active"),
    export_fields=("id", "name", "ad_type", "ad_unit_code", "platform", "is_active", "description", "created_at"),
    flag_filters=(FlagFilter("status", "is_active"),),
    choice_filters=(
        ChoiceFilter("adType", "ad_type", AD_TYPES),
        ChoiceFilter("platform", "platform", AD_PLATFORMS),
    ),
    stats_flags=("is_active",),
    stats_groups=("ad_type", "platform"),
)


@router.get("")
def list_ad_units(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    return list_page(collection_for(db, AdUnit), PROFILE, params, request.query_params).model_dump(by_alias=True)


@router.get("/types")
def ad_unit_types(admin=Depends(require_role(*READ_ROLES))):
    return {
        "types": [{"value": value, "label": AD_TYPE_LABELS[value]} for value in AD_TYPES],
        "platforms": list(AD_PLATFORMS),
    }


@router.get("/stats")
def ad_unit_stats(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    stats = collection_stats(collection_for(db, AdUnit), PROFILE, params, request.query_params)
    flags = stats.flags.get("is_active")
    return {
        "total": stats.total,
        "active": flags.true if flags else 0,
        "inactive": flags.false if flags else 0,
        "byType": [group.model_dump() for group in stats.groups.get("ad_type", [])],
        "byPlatform": [group.model_dump() for group in stats.groups.get("platform", [])],
    }


@router.get("/export")
def export_ad_units(
    request: Request,
    params: ListingParams = Depends(listing_params),
    db: Session = Depends(get_db),
    admin=Depends(require_role(*READ_ROLES)),
):
    body, filename = export_rows(collection_for(db, AdUnit), PROFILE, params, request.query_params)
    return csv_response(body, filename)


@router.get("/{id}")
def get_ad_unit(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    return public_row(get_or_404(db, AdUnit, id, NOT_FOUND))


@router.post("", status_code=201)
def create_ad_unit(payload: AdUnitUpsert, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = AdUnit(**payload.model_dump())
    db.add(row)
    commit_or_409(db, DUPLICATE_CODE)
    db.refresh(row)
    return public_row(row)


@router.put("/{id}")
def update_ad_unit(
    id: str,
    payload: AdUnitUpsert,
    db: Session = Depends(get_db),
    admin=Depends(require_role(*WRITE_ROLES)),
):
    row = get_or_404(db, AdUnit, id, NOT_FOUND)
    for key, value in payload.model_dump().items():
        setattr(row, key, value)
    db.add(row)
    commit_or_409(db, DUPLICATE_CODE)
    db.refresh(row)
    return public_row(row)


@router.patch("/{id}/toggle")
def toggle_ad_unit(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = get_or_404(db, AdUnit, id, NOT_FOUND)
    row.is_active = not row.is_active
    db.add(row)
    db.commit()
    return {"id": str(row.id), "is_active": row.is_active}


@router.delete("/{id}")
def delete_ad_unit(id: str, db: Session = Depends(get_db), admin=Depends(require_role(*WRITE_ROLES))):
    row = get_or_404(db, AdUnit, id, NOT_FOUND)
    db.delete(row)
    db.commit()
    return {"status": "deleted", "id": id}
