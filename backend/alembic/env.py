"""Alembic Environment — applies the OrderItem schema with the service's own async engine settings.

Invariants:
    - target_metadata is order_api.db.base.Base.metadata with OrderItem registered
    - The URL is DATABASE_URL when set, else sqlalchemy.url from alembic.ini
    - Either URL goes through config.async_database_url, as the running service does

Design Decisions:
    - Online mode runs the sync migration context inside one async connection (NullPool)
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from order_api.config import async_database_url
from order_api.db.base import Base
from order_api.models.order_item import OrderItem  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    url = os.environ.get("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    return async_database_url(url)


def run_migrations_offline() -> None:
    """Emit the OrderItem DDL as SQL without connecting."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_with(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_with)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
