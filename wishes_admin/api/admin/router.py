from fastapi import APIRouter
from wishes_admin.api.admin import ad_units, dashboard, shared_files, shared_wishes, templates, users

router = APIRouter()
router.include_router(dashboard.router, prefix="/dashboard", tags=["AdminDashboard"])
router.include_router(templates.router, prefix="/templates", tags=["AdminTemplates"])
router.include_router(shared_files.router, prefix="/files", tags=["AdminFiles"])
router.include_router(shared_wishes.router, prefix="/shared-wishes", tags=["AdminSharedWishes"])
router.include_router(ad_units.router, prefix="/ad-units", tags=["AdminAdUnits"])
router.include_router(users.router, prefix="/users", tags=["AdminUsers"])
