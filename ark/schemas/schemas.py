"""
Pydantic schemas for all request and response models.

Update schemas follow PATCH semantics: a field that is omitted or null is
left unchanged; any other value (including "" and []) overwrites.
"""
import uuid
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field

from ark.core.validation import MAX_TAG_LENGTH
from ark.models.models import Asset, AssetLog

Tag = Annotated[str, Field(max_length=MAX_TAG_LENGTH)]


# ---------------------------------------------------------------------------
# Asset
# ---------------------------------------------------------------------------

class AssetCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: Optional[str] = Field(default=None, max_length=50)
    hostname: Optional[str] = Field(default=None, max_length=255)
    metadata: Optional[Any] = None


class AssetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[str] = Field(default=None, max_length=50)
    hostname: Optional[str] = Field(default=None, max_length=255)
    metadata: Optional[Any] = None


class AssetOut(BaseModel):
    id: uuid.UUID
    user_id: str
    name: str
    type: Optional[str] = None
    hostname: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, asset: Asset) -> "AssetOut":
        return cls(
            id=asset.id,
            user_id=asset.user_id,
            name=asset.name,
            type=asset.type,
            hostname=asset.hostname,
            metadata=asset.metadata_,
            created_at=asset.created_at,
            updated_at=asset.updated_at,
        )


class AssetListOut(BaseModel):
    assets: list[AssetOut]
    total: int
    limit: int
    offset: int
    has_next: bool
    has_prev: bool


# ---------------------------------------------------------------------------
# Asset log
# ---------------------------------------------------------------------------

class LogCreate(BaseModel):
    content: str = Field(min_length=2, max_length=10_000)
    tags: Optional[list[Tag]] = None


class LogUpdate(BaseModel):
    content: Optional[str] = Field(default=None, min_length=2, max_length=10_000)
    tags: Optional[list[Tag]] = None


class LogOut(BaseModel):
    id: uuid.UUID
    asset_id: uuid.UUID
    user_id: str
    content: str
    tags: Optional[list[str]] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_model(cls, log: AssetLog) -> "LogOut":
        return cls.model_validate(log)


class LogListOut(BaseModel):
    logs: list[LogOut]
    total: int
    limit: int
    offset: int
    has_next: bool
    has_prev: bool


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------

class HealthOut(BaseModel):
    status: str
    version: str
    database: str
