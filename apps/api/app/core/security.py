from __future__ import annotations

import datetime
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi import Request

from app.core.config import Settings, get_settings
from app.core.errors import CatalogError, unauthorized
from app.core.observability import emit


def _require_secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise CatalogError("AUTH_NOT_CONFIGURED", "Authentication is not configured", 500)
    return settings.jwt_secret


def create_access_token(subject: str, role: str = "admin", settings: Optional[Settings] = None) -> str:
    s = settings or get_settings()
    now = datetime.datetime.now(datetime.timezone.utc)
    claims = {
        "sub": subject,
        "username": subject,
        "role": role,
        "iat": now,
        "exp": now + datetime.timedelta(seconds=s.jwt_expires_in),
    }
    return jwt.encode(claims, _require_secret(s), algorithm=s.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    s = settings or get_settings()
    return jwt.decode(token, _require_secret(s), algorithms=[s.jwt_algorithm])


def verify_password(plaintext: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash in config
        return False


def hash_password(plaintext: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _reject(request: Request, code: str, message: str) -> CatalogError:
    emit(
        "warning",
        "auth.rejected",
        f"{request.method} {request.url.path}: {code}",
        module=__name__,
        code=code,
    )
    return unauthorized(code, message)


def settings_for(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def require_auth(request: Request) -> Dict[str, Any]:
    """Bearer-token gate for mutating routes; attaches claims to request.state.user."""
    header = request.headers.get("Authorization")
    if not header:
        raise _reject(request, "NO_TOKEN", "Access denied. No token provided")

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise _reject(request, "BAD_FORMAT", "Invalid token format. Use: Bearer <token>")

    try:
        claims = decode_access_token(parts[1], settings_for(request))
    except jwt.ExpiredSignatureError:
        raise _reject(request, "INVALID_TOKEN", "Token expired")
    except jwt.InvalidTokenError:
        raise _reject(request, "INVALID_TOKEN", "Invalid token")

    request.state.user = claims
    return claims
