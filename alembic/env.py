"""Alembic environment configuration."""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool

from postboard_backend.database import BaseSchema, DatabaseService, get_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = BaseSchema.metadata


def run_migrations_offline(database_url: str) -> None:
    """Emit the migration SQL for *database_url* without connecting."""

    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(database_url: str) -> None:
    """Apply migrations over a connection built like the application's."""

    database = DatabaseService(database_url, poolclass=pool.NullPool)
    try:
        with database.engine.connect() as connection:
            context.configure(connection=connection, target_metadata=target_metadata)

            with context.begin_transaction():
                context.run_migrations()
    finally:
        database.dispose()


def run_migrations() -> None:
    """Dispatch migrations depending on the execution context."""

    database_url = get_settings().database_url
    if context.is_offline_mode():
        run_migrations_offline(database_url)
    else:
        run_migrations_online(database_url)


run_migrations()
