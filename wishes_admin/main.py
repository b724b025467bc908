from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from wishes_admin.core.config import settings
from wishes_admin.core.errors import install_error_handlers
from wishes_admin.core.http_hardening import REQUEST_ID_HEADER, install_http_hardening
from wishes_admin.api.admin.router import router as admin_router

app = FastAPI(title=settings.APP_NAME, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # the admin UI reads the export file name from Content-Disposition
    expose_headers=["Content-Disposition", REQUEST_ID_HEADER],
)
install_http_hardening(app)
install_error_handlers(app)

app.include_router(admin_router, prefix="/api/admin")

@app.get("/", include_in_schema=False)
def landing():
    return JSONResponse({"service": settings.APP_NAME, "status": "ok"})

@app.get("/health")
def health():
    return {"status": "ok"}
