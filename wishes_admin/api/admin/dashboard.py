from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wishes_admin.api.admin.listing import collection_for
from wishes_admin.core.deps import READ_ROLES, require_role
from wishes_admin.db.session import get_db
from wishes_admin.models.ad_unit import AdUnit
from wishes_admin.models.admin_user import AdminUser
from wishes_admin.models.shared_file import SharedFile
from wishes_admin.models.shared_wish import SharedWish
from wishes_admin.models.template import Template
from wishes_admin.services.query_engine.date_windows import day_start
from wishes_admin.services.query_engine.predicates import MATCH_ALL, Equals, Range
from wishes_admin.services.query_engine.stats import daily_series, fill_days

router = APIRouter()

RECENT_LIMIT = 5
TREND_DAYS = 7


def _recent_activities(db: Session) -> list[dict]:
    wishes = collection_for(db, SharedWish).find(MATCH_ALL, sort_field="created_at", descending=True, limit=RECENT_LIMIT)
    files = collection_for(db, SharedFile).find(MATCH_ALL, sort_field="created_at", descending=True, limit=RECENT_LIMIT)
    activities = [
        {
            "type": "wish",
            "id": row["id"],
            "title": f"Wish for {row['recipient_name']} from {row['sender_name']}",
            "created_at": row["created_at"],
        }
        for row in wishes
    ] + [
        {
            "type": "file",
            "id": row["id"],
            "title": row["original_name"],
            "created_at": row["created_at"],
        }
        for row in files
    ]
    activities.sort(key=lambda item: item["created_at"] or "", reverse=True)
    return activities[:RECENT_LIMIT]


@router.get("/summary")
def dashboard_summary(db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    templates = collection_for(db, Template)
    ad_units = collection_for(db, AdUnit)
    return {
        "templates": {
            "total": templates.count(MATCH_ALL),
            "active": templates.count(Equals("is_active", True)),
        },
        "files": collection_for(db, SharedFile).count(MATCH_ALL),
        "wishes": collection_for(db, SharedWish).count(MATCH_ALL),
        "adUnits": {
            "total": ad_units.count(MATCH_ALL),
            "active": ad_units.count(Equals("is_active", True)),
        },
        "users": collection_for(db, AdminUser).count(MATCH_ALL),
        "recentActivities": _recent_activities(db),
    }


@router.get("/stats")
def dashboard_stats(db: Session = Depends(get_db), admin=Depends(require_role(*READ_ROLES))):
    today = datetime.now(timezone.utc).date()
    window = Range("created_at", day_start(today - timedelta(days=TREND_DAYS - 1)), None)
    files = daily_series(collection_for(db, SharedFile), window)
    wishes = daily_series(collection_for(db, SharedWish), window)
    return {
        "days": TREND_DAYS,
        "files": [point.model_dump() for point in fill_days(files, last_day=today, days=TREND_DAYS)],
        "wishes": [point.model_dump() for point in fill_days(wishes, last_day=today, days=TREND_DAYS)],
    }
