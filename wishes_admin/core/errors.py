from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wishes_admin.services.query_engine.errors import (
    ExportTooLarge,
    InvalidFilter,
    InvalidPageRequest,
    StoreUnavailable,
)

_LOG = logging.getLogger("app.errors")

STORE_UNAVAILABLE_DETAIL = "Storage is temporarily unavailable, try again later"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidFilter)
    async def _invalid_filter(request: Request, exc: InvalidFilter):
        _LOG.warning("invalid filter on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})

    @app.exception_handler(InvalidPageRequest)
    async def _invalid_page_request(request: Request, exc: InvalidPageRequest):
        _LOG.warning("invalid page request on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})

    @app.exception_handler(ExportTooLarge)
    async def _export_too_large(request: Request, exc: ExportTooLarge):
        return JSONResponse(
            status_code=413,
            content={
                "detail": f"Export matches {exc.total} rows, the limit is {exc.limit}; narrow the filter",
                "total": exc.total,
                "limit": exc.limit,
            },
        )

    @app.exception_handler(StoreUnavailable)
    async def _store_unavailable(request: Request, exc: StoreUnavailable):
        # The adapter already logged the driver traceback.
        _LOG.error("store unavailable on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": STORE_UNAVAILABLE_DETAIL})

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
        return JSONResponse(
            status_code=400,
            content={"detail": str(first.get("msg") or "Invalid request"), "field": ".".join(loc) or None},
        )
