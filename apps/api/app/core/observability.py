from __future__ import annotations

# Contract locks:
# - log line keys: ts, level, message, request_id, event, module (+ extra)
# - X-Request-Id in/out (missing -> generated; always echoed back)
import datetime
import json
import logging
import os
from contextvars import ContextVar
from typing import Any, Dict, Optional

_log = logging.getLogger("app")
if not _log.handlers:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}


def now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def bind_request_id(rid: Optional[str]) -> None:
    _request_id.set(rid)


def current_request_id() -> Optional[str]:
    return _request_id.get()


def emit(level: str, event: str, message: str, request_id: Optional[str] = None, module: str = "app", **extra: Any) -> None:
    if _LEVELS.get(level.lower(), logging.INFO) < _log.getEffectiveLevel():
        return
    payload: Dict[str, Any] = {
        "ts": now_iso(),
        "level": level.lower(),
        "message": message,
        "request_id": request_id if request_id is not None else current_request_id(),
        "event": event,
        "module": module,
    }
    payload.update(extra)
    print(json.dumps(payload, ensure_ascii=False, default=str), flush=True)
