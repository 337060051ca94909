"""Alembic environment for the catalog schema. DATABASE_URL comes from app settings."""

import os
from logging.config import fileConfig

from alembic import context

os.environ.setdefault("APP_ENV", "dev")
from app.core.config import get_settings
from app.core.database import build_engine, is_sqlite

# Registers every table on Base.metadata.
from app.models import Admin, AppSetting, Base, Permission, Tag, TagCategory, User  # noqa: F401

config = context.config
# alembic.ini logging sections are optional; fileConfig raises KeyError without them.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def _configure_options(url: str) -> dict[str, object]:
    # SQLite cannot ALTER constraints in place; batch mode recreates the table.
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": is_sqlite(url),
    }


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without connecting."""
    url = get_settings().DATABASE_URL
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the migrations to the configured database."""
    url = get_settings().DATABASE_URL
    connectable = build_engine(url)
    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options(url))
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
