from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.core.errors import CatalogError
from app.core.rate_limit import client_key, general_limit, login_limit, sensitive_limit
from app.core.responses import ItemEnvelope, ok
from app.core.security import require_auth, settings_for
from .schemas import HashIn, HashOut, LoginIn, LoginOut, VerifyOut
from .service import generate_hash, login

router = APIRouter(prefix="/api/auth", tags=["auth"], dependencies=[Depends(general_limit), Depends(sensitive_limit)])


@router.post("/login", response_model=ItemEnvelope[LoginOut], dependencies=[Depends(login_limit)])
def api_login(body: LoginIn, request: Request) -> Dict[str, Any]:
    data = login(settings_for(request), body.username, body.password, client_key(request))
    # only failed attempts count against the login tier
    request.app.state.rate_limiters["login"].forgive(request)
    return ok(data, "Login successful")


@router.get("/verify", response_model=ItemEnvelope[VerifyOut])
def api_verify(claims: Dict[str, Any] = Depends(require_auth)) -> Dict[str, Any]:
    return ok({"user": claims}, "Token is valid")


@router.post("/generate-hash", response_model=ItemEnvelope[HashOut])
def api_generate_hash(body: HashIn, request: Request) -> Dict[str, Any]:
    if not settings_for(request).debug_routes_enabled:
        raise CatalogError("NOT_FOUND", "Route not found", 404)
    return ok(generate_hash(body.password), "Hash generated successfully")
