"""
ark/services/asset_service.py
──────────────────────────────
Asset use-cases: defaults, business validation and pagination metadata on
top of AssetRepository. Repository errors propagate unchanged.
"""

from __future__ import annotations

import logging
import uuid

from ark.core.validation import validate_asset_type, validate_metadata_json
from ark.repositories.asset_repository import AssetRepository
from ark.schemas.params import AssetQueryParams, pagination_meta
from ark.schemas.schemas import AssetCreate, AssetListOut, AssetOut, AssetUpdate

log = logging.getLogger(__name__)


class AssetService:

    def __init__(self, repo: AssetRepository):
        self.repo = repo

    async def list(self, user_id: str, params: AssetQueryParams) -> AssetListOut:
        params.set_defaults()
        assets = await self.repo.list(user_id, params)
        total = await self.repo.count(user_id, params)
        return AssetListOut(
            assets=[AssetOut.from_model(a) for a in assets],
            **pagination_meta(total, params.limit, params.offset),
        )

    async def get_by_id(self, user_id: str, asset_id: uuid.UUID) -> AssetOut:
        asset = await self.repo.get_by_id(user_id, asset_id)
        return AssetOut.from_model(asset)

    async def create(self, user_id: str, req: AssetCreate) -> AssetOut:
        validate_asset_type(req.type)
        metadata = validate_metadata_json(req.metadata)
        asset = await self.repo.create(user_id, req, metadata)
        log.info(f"[Assets] created asset={asset.id} user={user_id}")
        return AssetOut.from_model(asset)

    async def update(self, user_id: str, asset_id: uuid.UUID, req: AssetUpdate) -> AssetOut:
        validate_asset_type(req.type)
        metadata = validate_metadata_json(req.metadata)
        asset = await self.repo.update(user_id, asset_id, req, metadata)
        return AssetOut.from_model(asset)

    async def delete(self, user_id: str, asset_id: uuid.UUID) -> None:
        await self.repo.delete(user_id, asset_id)
        log.info(f"[Assets] deleted asset={asset_id} user={user_id}")
