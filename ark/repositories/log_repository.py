"""
ark/repositories/log_repository.py
───────────────────────────────────
Data access for the asset_logs table.

Visibility is decided by the log's own user_id, never by the parent asset.
The asset_id foreign key only guarantees the parent exists; ownership of the
parent is checked one layer up, in LogService.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from sqlalchemy import delete, func, insert, select, update

from ark.core.errors import NotFoundError
from ark.core.validation import LOG_SORT_FIELDS, validate_sort_params
from ark.models.models import AssetLog
from ark.repositories.base import (
    LIKE_ESCAPE,
    BaseRepository,
    like_pattern,
    order_by,
    tags_contain,
)
from ark.schemas.params import LogQueryParams
from ark.schemas.schemas import LogCreate, LogUpdate

_SORT_COLUMNS = {
    "created_at": AssetLog.created_at,
    "updated_at": AssetLog.updated_at,
}


class LogRepository(BaseRepository):

    async def get_by_id(self, user_id: str, log_id: uuid.UUID) -> AssetLog:
        result = await self._execute(
            "get log by id",
            select(AssetLog).where(AssetLog.id == log_id, AssetLog.user_id == user_id),
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundError("log not found")
        return entry

    # ── Listing ─────────────────────────────────────────────────────────

    def _filters(self, user_id: str, asset_id: uuid.UUID, params: LogQueryParams) -> list:
        clauses = [AssetLog.user_id == user_id, AssetLog.asset_id == asset_id]
        if params.tags:
            clauses.append(tags_contain(AssetLog.tags, params.tags, self.dialect))
        if params.search:
            clauses.append(AssetLog.content.ilike(like_pattern(params.search), escape=LIKE_ESCAPE))
        if params.start_date is not None:
            clauses.append(self._timestamp(AssetLog.created_at) >= self._timestamp(params.start_date))
        if params.end_date is not None:
            clauses.append(self._timestamp(AssetLog.created_at) <= self._timestamp(params.end_date))
        return clauses

    def _timestamp(self, value):
        # SQLite keeps timestamps as text in two formats (CURRENT_TIMESTAMP
        # has no fractional part, bound datetimes do); datetime() makes both
        # comparable.
        if self.dialect == "sqlite":
            return func.datetime(value)
        return value

    async def list_by_asset(
        self, user_id: str, asset_id: uuid.UUID, params: LogQueryParams
    ) -> list[AssetLog]:
        validate_sort_params(params.sort_by, params.sort_order, LOG_SORT_FIELDS)
        q = (
            select(AssetLog)
            .where(*self._filters(user_id, asset_id, params))
            .order_by(
                order_by(_SORT_COLUMNS[params.sort_by], params.sort_order),
                order_by(AssetLog.id, params.sort_order),
            )
            .limit(params.limit)
            .offset(params.offset)
        )
        result = await self._execute("list logs by asset", q)
        return list(result.scalars().all())

    async def count_by_asset(
        self, user_id: str, asset_id: uuid.UUID, params: LogQueryParams
    ) -> int:
        q = (
            select(func.count())
            .select_from(AssetLog)
            .where(*self._filters(user_id, asset_id, params))
        )
        result = await self._execute("count logs by asset", q)
        return result.scalar_one()

    # ── Mutations ───────────────────────────────────────────────────────

    async def create(
        self,
        user_id: str,
        asset_id: uuid.UUID,
        req: LogCreate,
        tags: Optional[list[str]] = None,
    ) -> AssetLog:
        """`tags` are the already-normalized tags; None stores NULL."""
        stmt = (
            insert(AssetLog)
            .values(asset_id=asset_id, user_id=user_id, content=req.content, tags=tags)
            .returning(AssetLog)
        )
        result = await self._execute("create log", stmt, fk_not_found="asset not found")
        entry = result.scalar_one()
        await self._commit("create log")
        return entry

    async def update(
        self,
        user_id: str,
        log_id: uuid.UUID,
        req: LogUpdate,
        tags: Optional[list[str]] = None,
    ) -> AssetLog:
        values: dict[str, Any] = {"updated_at": func.now()}
        if req.content is not None:
            values["content"] = req.content
        if tags is not None:
            # [] clears the tags and is stored as an empty list, not NULL
            values["tags"] = tags

        stmt = (
            update(AssetLog)
            .where(AssetLog.id == log_id, AssetLog.user_id == user_id)
            .values(**values)
            .returning(AssetLog)
            .execution_options(populate_existing=True)
        )
        result = await self._execute("update log", stmt)
        entry = result.scalar_one_or_none()
        await self._commit("update log")
        if entry is None:
            raise NotFoundError("log not found")
        return entry

    async def delete(self, user_id: str, log_id: uuid.UUID) -> None:
        stmt = (
            delete(AssetLog)
            .where(AssetLog.id == log_id, AssetLog.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute("delete log", stmt)
        await self._commit("delete log")
        if result.rowcount == 0:
            raise NotFoundError("log not found")
