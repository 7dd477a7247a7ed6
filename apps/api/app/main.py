from __future__ import annotations

# Contract locks:
# - /health keys: status, version, db
# - X-Request-Id in/out (missing -> generated; always echoed back; also on errors)
# - Failure envelope keys: success=false, message, error (+ details when present)
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.db import db_health
from app.core.errors import CatalogError
from app.core.observability import bind_request_id, emit
from app.core.rate_limit import build_limiters
from app.core.responses import failure
from app.modules.auth.router import router as auth_router
from app.modules.catalog_types.router import routers as catalog_type_routers
from app.modules.characters.router import router as characters_router
from app.modules.devil_fruits.router import router as devil_fruits_router
from app.modules.organizations.router import router as organizations_router
from app.modules.ships.router import router as ships_router


def _err_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    h = dict(headers or {})
    rid = getattr(request.state, "request_id", None)
    if rid:
        h["X-Request-Id"] = rid
    return JSONResponse(status_code=status_code, content=failure(code, message, details), headers=h)


_HTTP_CODES = {404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED"}


def _install_observability(app: FastAPI, settings: Settings) -> None:
    @app.middleware("http")
    async def _request_id_mw(request: Request, call_next):
        rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex.upper()
        request.state.request_id = rid
        bind_request_id(rid)
        emit("info", "http.request.start", f"{request.method} {request.url.path}", rid, __name__)
        try:
            resp = await call_next(request)
        except Exception as e:
            emit("error", "http.request.exception", str(e), rid, __name__)
            raise
        resp.headers["X-Request-Id"] = rid
        emit("info", "http.request.end", f"{request.method} {request.url.path} -> {getattr(resp, 'status_code', None)}", rid, __name__)
        return resp

    @app.exception_handler(CatalogError)
    async def _catalog_exc_handler(request: Request, exc: CatalogError):
        return _err_response(request, exc.status_code, exc.code, exc.message, exc.details, exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        code = _HTTP_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return _err_response(request, exc.status_code, code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def _validation_exc_handler(request: Request, exc: RequestValidationError):
        errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
        return _err_response(request, 400, "VALIDATION_ERROR", "Request validation failed", errors)

    @app.exception_handler(Exception)
    async def _unhandled_exc_handler(request: Request, exc: Exception):
        details = {"type": type(exc).__name__, "error": str(exc)} if settings.is_development else None
        return _err_response(request, 500, "INTERNAL_ERROR", "Internal server error", details)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.rate_limiters = build_limiters(
        settings.rate_limit_window_seconds,
        settings.rate_limit_max_requests,
        settings.rate_limit_sensitive_max,
        settings.rate_limit_login_max,
    )

    _install_observability(app, settings)

    app.include_router(auth_router)
    for r in catalog_type_routers:
        app.include_router(r)
    app.include_router(characters_router)
    app.include_router(devil_fruits_router)
    app.include_router(organizations_router)
    app.include_router(ships_router)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        db = db_health()
        return {
            "status": "ok" if db.get("status") == "ok" else "degraded",
            "version": settings.app_version,
            "db": db,
        }

    return app


app = create_app()
