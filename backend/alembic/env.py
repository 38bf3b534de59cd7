"""
CustomerBook Backend — Alembic Migration Environment
======================================================

The target database is settings.database_url, never alembic.ini, so
`alembic upgrade head` and the running app always agree.

SQLite cannot ALTER most column properties in place, so on SQLite URLs
migrations run in batch mode (copy-and-move tables).
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from app.config import settings
from app.database import Base

# Registers the customers table on Base.metadata for --autogenerate
from app.models.customer import Customer  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _migration_options() -> dict:
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "render_as_batch": settings.is_sqlite,
    }


def run_migrations_offline() -> None:
    """`alembic upgrade head --sql`: print the DDL instead of executing it."""
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_migration_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on_connection(connection: Connection) -> None:
    context.configure(connection=connection, **_migration_options())
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    # NullPool: the migration process opens exactly one connection
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
