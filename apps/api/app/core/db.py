"""
DB utilities (sqlite default).

Defaults:
- DATABASE_URL: sqlite:///./data/app.db
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import get_settings


def get_database_url() -> str:
    return get_settings().database_url


def _repo_root() -> Path:
    # apps/api/app/core/db.py -> repo root = parents[4]
    return Path(__file__).resolve().parents[4]


def resolve_sqlite_path(database_url: str) -> Optional[Path]:
    if not database_url.startswith("sqlite:///"):
        return None
    p = database_url[len("sqlite:///") :]

    # absolute unix
    if p.startswith("/"):
        return Path(p)

    # absolute windows drive, both C:/ and C:\ forms
    if len(p) >= 3 and p[1] == ":" and (p[2] == "/" or p[2] == "\\"):
        return Path(p)

    # relative -> repo root
    return (_repo_root() / p).resolve()


_engine: Optional[Engine] = None


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ships with FK enforcement off; turn it on for every new connection."""

    @event.listens_for(engine, "connect")
    def _fk_pragma(dbapi_conn, _record) -> None:
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


def get_engine() -> Engine:
    global _engine
    if _engine is not None:
        return _engine

    url = get_database_url()
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    sp = resolve_sqlite_path(url)
    if sp is not None:
        sp.parent.mkdir(parents=True, exist_ok=True)
        url = "sqlite:///" + sp.as_posix()

    _engine = create_engine(url, connect_args=connect_args)
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(_engine)
    return _engine


def set_engine(engine: Optional[Engine]) -> None:
    """Swap the process engine (tests, scripts). None -> rebuilt lazily from settings."""
    global _engine
    _engine = engine


def get_session() -> Iterator[Session]:
    with Session(get_engine()) as session:
        yield session


def init_schema(engine: Optional[Engine] = None) -> None:
    # table classes must be imported so they register on SQLModel.metadata
    from app.modules.catalog_types import models as _catalog_types  # noqa: F401
    from app.modules.characters import models as _characters  # noqa: F401
    from app.modules.devil_fruits import models as _devil_fruits  # noqa: F401
    from app.modules.organizations import models as _organizations  # noqa: F401
    from app.modules.ships import models as _ships  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())


def db_health() -> Dict[str, Any]:
    url = get_database_url()
    kind = "sqlite" if url.startswith("sqlite") else url.split(":", 1)[0]
    sp = resolve_sqlite_path(url)
    path = str(sp.as_posix()) if sp is not None else None

    try:
        eng = get_engine()
        with eng.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "kind": kind, "path": path}
    except Exception as e:
        return {"status": "error", "kind": kind, "path": path, "error": type(e).__name__}
