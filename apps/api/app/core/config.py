"""
Runtime settings (env-driven).

Defaults:
- DATABASE_URL: sqlite:///./data/app.db
- APP_ENV: production (development|test unlock debug-only routes and error details)
- RATE_LIMIT_*: 900s window, 100 general / 50 sensitive / 5 login
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _password_hash_env() -> Optional[str]:
    raw = os.getenv("ADMIN_PASSWORD_HASH")
    if not raw:
        return None
    # some deployment tools escape "$" in bcrypt hashes
    if not raw.startswith("$2"):
        raw = raw.replace("\\$", "$")
    return raw


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    environment: str
    database_url: str

    jwt_secret: Optional[str]
    jwt_algorithm: str
    jwt_expires_in: int

    admin_username: Optional[str]
    admin_password_hash: Optional[str]

    rate_limit_window_seconds: int
    rate_limit_max_requests: int
    rate_limit_sensitive_max: int
    rate_limit_login_max: int

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def debug_routes_enabled(self) -> bool:
        return self.environment in ("development", "test")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_name=os.getenv("APP_NAME", "One Piece Catalog API"),
            app_version=os.getenv("APP_VERSION", "0.1.0"),
            environment=os.getenv("APP_ENV", "production").strip().lower(),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./data/app.db"),
            jwt_secret=os.getenv("JWT_SECRET") or None,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_in=_int_env("JWT_EXPIRES_IN", 24 * 60 * 60),
            admin_username=os.getenv("ADMIN_USERNAME") or None,
            admin_password_hash=_password_hash_env(),
            rate_limit_window_seconds=_int_env("RATE_LIMIT_WINDOW_SECONDS", 15 * 60),
            rate_limit_max_requests=_int_env("RATE_LIMIT_MAX_REQUESTS", 100),
            rate_limit_sensitive_max=_int_env("RATE_LIMIT_SENSITIVE_MAX", 50),
            rate_limit_login_max=_int_env("RATE_LIMIT_LOGIN_MAX", 5),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
