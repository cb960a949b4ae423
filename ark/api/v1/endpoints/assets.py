"""
ark/api/v1/endpoints/assets.py
───────────────────────────────
Routes:
  GET    /api/v1/assets              — paginated, filterable list
  POST   /api/v1/assets              — create
  GET    /api/v1/assets/{asset_id}   — fetch one
  PATCH  /api/v1/assets/{asset_id}   — partial update
  DELETE /api/v1/assets/{asset_id}   — delete (cascades to logs)
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ark.core.database import get_db
from ark.core.deps import get_current_user_id
from ark.repositories.asset_repository import AssetRepository
from ark.schemas.params import AssetQueryParams
from ark.schemas.schemas import AssetCreate, AssetListOut, AssetOut, AssetUpdate
from ark.services.asset_service import AssetService

router = APIRouter(prefix="/assets", tags=["Assets"])


def get_asset_service(db: AsyncSession = Depends(get_db)) -> AssetService:
    return AssetService(AssetRepository(db))


@router.get("", response_model=AssetListOut, response_model_exclude_none=True)
async def list_assets(
    limit: int = Query(0, ge=0),
    offset: int = Query(0),
    type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: str = Query(""),
    sort_order: str = Query(""),
    user_id: str = Depends(get_current_user_id),
    service: AssetService = Depends(get_asset_service),
):
    params = AssetQueryParams(
        limit=limit,
        offset=offset,
        type=type,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return await service.list(user_id, params)


@router.post("", response_model=AssetOut, status_code=201, response_model_exclude_none=True)
async def create_asset(
    payload: AssetCreate,
    user_id: str = Depends(get_current_user_id),
    service: AssetService = Depends(get_asset_service),
):
    return await service.create(user_id, payload)


@router.get("/{asset_id}", response_model=AssetOut, response_model_exclude_none=True)
async def get_asset(
    asset_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    service: AssetService = Depends(get_asset_service),
):
    return await service.get_by_id(user_id, asset_id)


@router.patch("/{asset_id}", response_model=AssetOut, response_model_exclude_none=True)
async def update_asset(
    asset_id: uuid.UUID,
    payload: AssetUpdate,
    user_id: str = Depends(get_current_user_id),
    service: AssetService = Depends(get_asset_service),
):
    return await service.update(user_id, asset_id, payload)


@router.delete("/{asset_id}", status_code=204)
async def delete_asset(
    asset_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    service: AssetService = Depends(get_asset_service),
):
    await service.delete(user_id, asset_id)
    return Response(status_code=204)
