"""
Postboard Backend — Migration Environment
===========================================

What:  Runs the revisions under alembic/versions against `DATABASE_URL`.
How:   The URL always comes from `postboard.config.settings`, never from
       alembic.ini. Online runs go through an async engine (aiosqlite or
       asyncpg) and hand the connection to Alembic with `run_sync`.
       SQLite URLs run in batch mode, since SQLite cannot ALTER most
       column or constraint definitions in place.

Usage:
    cd backend
    alembic upgrade head
    alembic revision --autogenerate -m "add post slug"
"""

import asyncio
from logging.config import fileConfig
from typing import Any, Dict

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from postboard.config import settings
from postboard.database import Base
import postboard.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", settings.database_url)


def configure_options() -> Dict[str, Any]:
    """Options shared by offline and online runs."""
    return {
        "target_metadata": Base.metadata,
        "render_as_batch": settings.is_sqlite,
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, **configure_options())

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
