"""Alembic environment for the accounts schema.

The database URL comes from Settings (DATABASE_URL), or from
`alembic -x url=...` when migrating a database other than the configured one.
Migrations run over an async engine; SQLite targets use batch mode so that
ALTER-style operations work there too.
"""

import asyncio
from logging.config import fileConfig
from typing import Any

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from erp_identity.core.config import get_settings
from erp_identity.infrastructure.persistence import BaseModel

# Registers the tables on BaseModel.metadata
from erp_identity.infrastructure.persistence.models import (  # noqa: F401
    AccountModel,
    ActivityLogModel,
)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    return override or get_settings().database_url


def _configure_kwargs(url: str) -> dict[str, Any]:
    return {
        "target_metadata": BaseModel.metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    url = _database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection, url: str) -> None:
    context.configure(connection=connection, **_configure_kwargs(url))

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations over a throwaway async engine."""
    url = _database_url()
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate, url)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
