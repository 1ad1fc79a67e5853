"""Alembic environment for the `projects` schema.

The URL comes from the application Settings when DATABASE_URL is set, so
migrations and the API agree on driver rewriting; otherwise alembic.ini's
sqlalchemy.url is used. Online runs go through an async engine.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from crowdfund.config import get_settings
from crowdfund.db.base import Base
import crowdfund.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return get_settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _migrate(connection: Connection | None = None, **options) -> None:
    context.configure(
        connection=connection, target_metadata=target_metadata, **options,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    _migrate(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
