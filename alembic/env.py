"""Single-database Alembic env for the async PostgreSQL engine."""
import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

# ── bring in app objects ────────────────────────────────────────────────────
from ark.core.config import settings
from ark.core.database import Base

# import all models so Alembic sees them in Base.metadata
import ark.models.models  # noqa: F401

# ── alembic Config object ───────────────────────────────────────────────────
config = context.config

# sqlalchemy.url in alembic.ini is a placeholder; DATABASE_URL wins
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:                  # pragma: no cover
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Columns that exist only in the migrations (generated by PostgreSQL) and
# must not show up as "removed" in autogenerate diffs.
MIGRATION_ONLY_COLUMNS = {("asset_logs", "search_vector")}


def include_object(obj, name, type_, reflected, compare_to):
    if type_ == "column" and reflected and compare_to is None:
        return (obj.table.name, name) not in MIGRATION_ONLY_COLUMNS
    return True


# ── offline mode ────────────────────────────────────────────────────────────
def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


# ── online mode (async) ─────────────────────────────────────────────────────
def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_object=include_object,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
