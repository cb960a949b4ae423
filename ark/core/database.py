"""
Async SQLAlchemy engine, session factory and FastAPI session dependency.

One AsyncSession per request; the connection it checks out of the pool is
returned when the session closes, on success and error paths alike.
"""
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ark.core.config import settings

PG_FOREIGN_KEY_VIOLATION = "23503"


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str) -> dict:
    # SQLite (tests, local hacking) has no server-side pool to size.
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_kwargs(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session


async def ping_database(db: AsyncSession) -> bool:
    """Round-trip a trivial query. Used by the health endpoint."""
    result = await db.execute(text("SELECT 1"))
    return result.scalar() == 1


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == PG_FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(orig)
