"""Alembic environment — migrations for the invoices, tags and invoice_tag tables.

Design Decisions:
    - URL resolution goes through invoice_api.config.Settings, so DATABASE_URL
      and .env are honoured and postgresql:// is rewritten the same way the app does;
      alembic.ini's URL is used only when DATABASE_URL is unset
    - Online runs build the engine via db/session.build_engine (NullPool), so
      SQLite migrations see foreign keys enforced like the app does
    - SQLite gets render_as_batch: ALTER TABLE there needs copy-and-move
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url

from alembic import context

from invoice_api.config import Settings
from invoice_api.db.base import Base
from invoice_api.db.session import build_engine
# Populate Base.metadata for autogenerate
from invoice_api.models import Invoice, Tag, invoice_tag  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return Settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure(dialect_name: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=dialect_name == "sqlite",
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL without connecting."""
    url = _database_url()
    _configure(
        make_url(url).get_backend_name(),
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection.dialect.name, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = build_engine(_database_url(), poolclass=pool.NullPool)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
