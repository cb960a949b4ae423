"""
ark/services/log_service.py
────────────────────────────
Asset-log use-cases.

Listing and creating go through the parent asset first: the caller must own
the asset, otherwise the request fails with "asset not found" before the log
table is touched. Tags are normalized on every write that carries them.
"""

from __future__ import annotations

import logging
import uuid

from ark.core.validation import normalize_tags
from ark.repositories.asset_repository import AssetRepository
from ark.repositories.log_repository import LogRepository
from ark.schemas.params import LogQueryParams, pagination_meta
from ark.schemas.schemas import LogCreate, LogListOut, LogOut, LogUpdate

log = logging.getLogger(__name__)


class LogService:

    def __init__(self, logs: LogRepository, assets: AssetRepository):
        self.logs = logs
        self.assets = assets

    async def list_by_asset(
        self, user_id: str, asset_id: uuid.UUID, params: LogQueryParams
    ) -> LogListOut:
        await self.assets.get_by_id(user_id, asset_id)
        params.set_defaults()
        # stored tags are normalized, so the filter must be too
        params.tags = normalize_tags(params.tags)
        entries = await self.logs.list_by_asset(user_id, asset_id, params)
        total = await self.logs.count_by_asset(user_id, asset_id, params)
        return LogListOut(
            logs=[LogOut.from_model(e) for e in entries],
            **pagination_meta(total, params.limit, params.offset),
        )

    async def get_by_id(self, user_id: str, log_id: uuid.UUID) -> LogOut:
        entry = await self.logs.get_by_id(user_id, log_id)
        return LogOut.from_model(entry)

    async def create(self, user_id: str, asset_id: uuid.UUID, req: LogCreate) -> LogOut:
        await self.assets.get_by_id(user_id, asset_id)
        entry = await self.logs.create(user_id, asset_id, req, normalize_tags(req.tags))
        log.info(f"[Logs] created log={entry.id} asset={asset_id} user={user_id}")
        return LogOut.from_model(entry)

    async def update(self, user_id: str, log_id: uuid.UUID, req: LogUpdate) -> LogOut:
        entry = await self.logs.update(user_id, log_id, req, normalize_tags(req.tags))
        return LogOut.from_model(entry)

    async def delete(self, user_id: str, log_id: uuid.UUID) -> None:
        await self.logs.delete(user_id, log_id)
        log.info(f"[Logs] deleted log={log_id} user={user_id}")
