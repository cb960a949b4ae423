"""
ark/repositories/base.py
─────────────────────────
Shared plumbing for the tenant-scoped repositories.

Every repository method takes the tenant (user_id) as its first argument
and ANDs it into every statement it issues. Queries are built as lists of
SQLAlchemy predicates with bound parameters; caller-supplied strings never
reach an identifier position.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import and_, func, literal, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ark.core.database import is_foreign_key_violation
from ark.core.errors import NotFoundError, RepositoryError

LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards in `term` escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def order_by(column, sort_order: str):
    return column.asc() if sort_order == "asc" else column.desc()


def tags_contain(column, tags: list[str], dialect: str):
    """
    Stored tag list must be a superset of `tags`.

    PostgreSQL: native array containment (`tags @> :tags`), GIN-indexed.
    SQLite (tests): tags are stored as a JSON array, so each requested tag
    becomes an EXISTS over json_each().
    """
    if dialect == "postgresql":
        return column.contains(tags)
    clauses = []
    for tag in tags:
        elements = func.json_each(column).table_valued("value")
        clauses.append(
            select(literal(1)).select_from(elements).where(elements.c.value == tag).exists()
        )
    return and_(*clauses)


class BaseRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def dialect(self) -> str:
        return self.db.bind.dialect.name

    async def _execute(self, operation: str, stmt, *, fk_not_found: Optional[str] = None) -> Any:
        """
        Run `stmt`, wrapping driver errors with the operation name.

        With `fk_not_found`, a foreign-key violation becomes NotFoundError
        carrying that message instead of leaking the store's error code.
        """
        try:
            return await self.db.execute(stmt)
        except IntegrityError as e:
            await self.db.rollback()
            if fk_not_found and is_foreign_key_violation(e):
                raise NotFoundError(fk_not_found) from None
            raise RepositoryError(f"{operation}: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RepositoryError(f"{operation}: {e}") from e

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RepositoryError(f"{operation}: {e}") from e
