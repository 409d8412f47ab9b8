"""Alembic environment for the admins schema; the URL comes from Settings, not alembic.ini."""

import os

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from admin_service.core.config import settings
from admin_service.core.logging import configure_logging
from admin_service.models import Admin, Base  # noqa: F401

configure_logging(settings.LOG_LEVEL)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Print the migration SQL for settings.DATABASE_URL."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(settings.DATABASE_URL, poolclass=NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
