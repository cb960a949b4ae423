"""
API v1 router — aggregates all endpoint sub-routers.
"""
from fastapi import APIRouter

from ark.api.v1.endpoints import assets, logs

api_router = APIRouter()

api_router.include_router(assets.router)
api_router.include_router(logs.asset_logs_router)
api_router.include_router(logs.router)
