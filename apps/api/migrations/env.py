from __future__ import annotations

import sys
from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel
from alembic import context

THIS = Path(__file__).resolve()
API_DIR = THIS.parents[1]  # apps/api
sys.path.insert(0, str(API_DIR))

from app.core.db import get_database_url, resolve_sqlite_path  # noqa: E402
from app.modules.catalog_types import models as _catalog_types  # noqa: E402,F401
from app.modules.characters import models as _characters  # noqa: E402,F401
from app.modules.devil_fruits import models as _devil_fruits  # noqa: E402,F401
from app.modules.organizations import models as _organizations  # noqa: E402,F401
from app.modules.ships import models as _ships  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def get_url() -> str:
    url = get_database_url()
    sp = resolve_sqlite_path(url)
    if sp is None:
        return url
    sp.parent.mkdir(parents=True, exist_ok=True)
    return "sqlite:///" + sp.as_posix()


def run_migrations_offline() -> None:
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        future=True,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
