from __future__ import annotations

from typing import Any, Dict, Optional

from app.core.config import Settings
from app.core.errors import CatalogError, bad_request
from app.core.observability import emit
from app.core.security import create_access_token, hash_password, verify_password

ADMIN_ROLE = "admin"


def login(settings: Settings, username: Optional[str], password: Optional[str], client: str) -> Dict[str, Any]:
    if not username or not password:
        emit("warning", "auth.login.failed", "missing credentials", module=__name__, client=client, reason="missing_credentials")
        raise bad_request("MISSING_CREDENTIALS", "Username and password are required")

    if not settings.admin_username or not settings.admin_password_hash or not settings.jwt_secret:
        emit("error", "auth.login.failed", "authentication is not configured", module=__name__, client=client, reason="not_configured")
        raise CatalogError("AUTH_NOT_CONFIGURED", "Authentication configuration error", 500)

    # same message for unknown user and wrong password
    if username != settings.admin_username or not verify_password(password, settings.admin_password_hash):
        emit("warning", "auth.login.failed", f"invalid credentials for {username!r}", module=__name__, client=client, reason="invalid_credentials")
        raise CatalogError("INVALID_CREDENTIALS", "Invalid credentials", 401)

    token = create_access_token(settings.admin_username, ADMIN_ROLE, settings=settings)
    emit("info", "auth.login.success", f"{settings.admin_username} logged in", module=__name__, client=client)
    return {
        "token": token,
        "token_type": "Bearer",
        "expires_in": settings.jwt_expires_in,
        "user": {"username": settings.admin_username, "role": ADMIN_ROLE},
    }


def generate_hash(password: Optional[str]) -> Dict[str, Any]:
    if not password:
        raise bad_request("MISSING_PASSWORD", "Password is required")
    return {
        "hash": hash_password(password),
        "note": "Store this value in ADMIN_PASSWORD_HASH",
    }
