"""
ark/repositories/asset_repository.py
─────────────────────────────────────
Data access for the assets table.

All methods are scoped to the requesting tenant. Lookups use the dual key
(id AND user_id), so "does not exist" and "belongs to someone else" both
surface as the same NotFoundError.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from sqlalchemy import delete, func, insert, or_, select, update

from ark.core.errors import NotFoundError
from ark.core.validation import ASSET_SORT_FIELDS, validate_sort_params
from ark.models.models import Asset
from ark.repositories.base import LIKE_ESCAPE, BaseRepository, like_pattern, order_by
from ark.schemas.params import AssetQueryParams
from ark.schemas.schemas import AssetCreate, AssetUpdate

_SORT_COLUMNS = {
    "name": Asset.name,
    "created_at": Asset.created_at,
    "updated_at": Asset.updated_at,
}


class AssetRepository(BaseRepository):

    async def get_by_id(self, user_id: str, asset_id: uuid.UUID) -> Asset:
        result = await self._execute(
            "get asset by id",
            select(Asset).where(Asset.id == asset_id, Asset.user_id == user_id),
        )
        asset = result.scalar_one_or_none()
        if asset is None:
            raise NotFoundError("asset not found")
        return asset

    # ── Listing ─────────────────────────────────────────────────────────

    def _filters(self, user_id: str, params: AssetQueryParams) -> list:
        clauses = [Asset.user_id == user_id]
        if params.type is not None:
            clauses.append(Asset.type == params.type)
        if params.search:
            pattern = like_pattern(params.search)
            clauses.append(
                or_(
                    Asset.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Asset.hostname.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return clauses

    async def list(self, user_id: str, params: AssetQueryParams) -> list[Asset]:
        validate_sort_params(params.sort_by, params.sort_order, ASSET_SORT_FIELDS)
        q = (
            select(Asset)
            .where(*self._filters(user_id, params))
            .order_by(
                order_by(_SORT_COLUMNS[params.sort_by], params.sort_order),
                order_by(Asset.id, params.sort_order),
            )
            .limit(params.limit)
            .offset(params.offset)
        )
        result = await self._execute("list assets", q)
        return list(result.scalars().all())

    async def count(self, user_id: str, params: AssetQueryParams) -> int:
        q = select(func.count()).select_from(Asset).where(*self._filters(user_id, params))
        result = await self._execute("count assets", q)
        return result.scalar_one()

    # ── Mutations ───────────────────────────────────────────────────────

    async def create(
        self, user_id: str, req: AssetCreate, metadata: Optional[dict] = None
    ) -> Asset:
        stmt = (
            insert(Asset)
            .values(
                user_id=user_id,
                name=req.name,
                type=req.type,          # None -> NULL
                hostname=req.hostname,  # None -> NULL
                metadata_=metadata,     # None -> NULL, {} stays {}
            )
            .returning(Asset)
        )
        result = await self._execute("create asset", stmt)
        asset = result.scalar_one()
        await self._commit("create asset")
        return asset

    async def update(
        self,
        user_id: str,
        asset_id: uuid.UUID,
        req: AssetUpdate,
        metadata: Optional[dict] = None,
    ) -> Asset:
        """Apply only the non-null fields of `req`; updated_at is always refreshed."""
        values: dict[str, Any] = {"updated_at": func.now()}
        if req.name is not None:
            values["name"] = req.name
        if req.type is not None:
            values["type"] = req.type
        if req.hostname is not None:
            values["hostname"] = req.hostname
        if metadata is not None:
            values["metadata_"] = metadata

        stmt = (
            update(Asset)
            .where(Asset.id == asset_id, Asset.user_id == user_id)
            .values(**values)
            .returning(Asset)
            .execution_options(populate_existing=True)
        )
        result = await self._execute("update asset", stmt)
        asset = result.scalar_one_or_none()
        await self._commit("update asset")
        if asset is None:
            raise NotFoundError("asset not found")
        return asset

    async def delete(self, user_id: str, asset_id: uuid.UUID) -> None:
        """Child logs are removed by the ON DELETE CASCADE foreign key."""
        stmt = (
            delete(Asset)
            .where(Asset.id == asset_id, Asset.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute("delete asset", stmt)
        await self._commit("delete asset")
        if result.rowcount == 0:
            raise NotFoundError("asset not found")
