"""
ark/api/v1/endpoints/logs.py
─────────────────────────────
Logs are created and listed under their asset, but addressed directly by id
afterwards.

Routes:
  GET    /api/v1/assets/{asset_id}/logs   — paginated list, tag/search/date filters
  POST   /api/v1/assets/{asset_id}/logs   — create
  GET    /api/v1/logs/{log_id}            — fetch one
  PATCH  /api/v1/logs/{log_id}            — partial update
  DELETE /api/v1/logs/{log_id}            — delete
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ark.core.database import get_db
from ark.core.deps import get_current_user_id
from ark.repositories.asset_repository import AssetRepository
from ark.repositories.log_repository import LogRepository
from ark.schemas.params import LogQueryParams
from ark.schemas.schemas import LogCreate, LogListOut, LogOut, LogUpdate
from ark.services.log_service import LogService

asset_logs_router = APIRouter(prefix="/assets/{asset_id}/logs", tags=["Logs"])
router = APIRouter(prefix="/logs", tags=["Logs"])


def get_log_service(db: AsyncSession = Depends(get_db)) -> LogService:
    return LogService(LogRepository(db), AssetRepository(db))


# ─────────────────────────────────────────────────────────────────────────
# Nested under an asset
# ─────────────────────────────────────────────────────────────────────────

@asset_logs_router.get("", response_model=LogListOut, response_model_exclude_none=True)
async def list_logs(
    asset_id: uuid.UUID,
    limit: int = Query(0, ge=0),
    offset: int = Query(0),
    tags: list[str] = Query(default=[]),
    search: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    sort_by: str = Query(""),
    sort_order: str = Query(""),
    user_id: str = Depends(get_current_user_id),
    service: LogService = Depends(get_log_service),
):
    params = LogQueryParams(
        limit=limit,
        offset=offset,
        tags=tags,
        search=search,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return await service.list_by_asset(user_id, asset_id, params)


@asset_logs_router.post("", response_model=LogOut, status_code=201, response_model_exclude_none=True)
async def create_log(
    asset_id: uuid.UUID,
    payload: LogCreate,
    user_id: str = Depends(get_current_user_id),
    service: LogService = Depends(get_log_service),
):
    return await service.create(user_id, asset_id, payload)


# ─────────────────────────────────────────────────────────────────────────
# Addressed by log id
# ─────────────────────────────────────────────────────────────────────────

@router.get("/{log_id}", response_model=LogOut, response_model_exclude_none=True)
async def get_log(
    log_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    service: LogService = Depends(get_log_service),
):
    return await service.get_by_id(user_id, log_id)


@router.patch("/{log_id}", response_model=LogOut, response_model_exclude_none=True)
async def update_log(
    log_id: uuid.UUID,
    payload: LogUpdate,
    user_id: str = Depends(get_current_user_id),
    service: LogService = Depends(get_log_service),
):
    return await service.update(user_id, log_id, payload)


@router.delete("/{log_id}", status_code=204)
async def delete_log(
    log_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    service: LogService = Depends(get_log_service),
):
    await service.delete(user_id, log_id)
    return Response(status_code=204)
