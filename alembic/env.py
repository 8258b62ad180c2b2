"""
Alembic environment for the ProjectHub schema.

The target database is ``sqlalchemy.url`` when the caller set one on the
Alembic config (``projecthub db --database-url``), otherwise the URL the
application itself would use.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context  # type: ignore[reportMissingImports]
from projecthub.database.connection import get_database_url, to_async_url
from projecthub.dbmodels import target_metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def migration_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_url()


def configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_on_connection(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place
    configure_and_run(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )


async def run_online() -> None:
    engine = create_async_engine(to_async_url(migration_url()), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    configure_and_run(
        url=migration_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(run_online())
