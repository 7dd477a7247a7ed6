from __future__ import annotations

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """A structured rejection: reason code + user-facing message + HTTP status.

    Raised by validation, query translation, integrity checks, the auth gate and
    the rate limiter; rendered into the failure envelope by the handler in main.py.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.headers = headers

    def __repr__(self) -> str:
        return f"CatalogError({self.code!r}, {self.message!r}, status_code={self.status_code})"


def bad_request(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> CatalogError:
    return CatalogError(code, message, 400, details)


def not_found(label: str, item_id: Any) -> CatalogError:
    return CatalogError("NOT_FOUND", f"{label} with ID {item_id} not found", 404)


def conflict(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> CatalogError:
    return CatalogError(code, message, 409, details)


def unauthorized(code: str, message: str) -> CatalogError:
    return CatalogError(code, message, 401, headers={"WWW-Authenticate": "Bearer"})


def parse_id(raw: Any, label: str = "ID") -> int:
    """Path ids must be positive integers; anything else is INVALID_ID."""
    s = str(raw).strip() if raw is not None else ""
    if not (s.isascii() and s.isdigit()):
        raise bad_request("INVALID_ID", f"Invalid {label}")
    v = int(s)
    if v <= 0:
        raise bad_request("INVALID_ID", f"Invalid {label}")
    return v
