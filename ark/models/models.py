"""
SQLAlchemy ORM models.

Multi-tenant: every row carries the identity-provider subject (user_id)
that owns it. The PostgreSQL schema itself (extensions, updated_at trigger,
generated search vector, GIN indexes) is owned by the Alembic migrations;
the generic variants below let the same models run on SQLite in tests.
"""

import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text, UUID
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ark.core.database import Base


# ---------------------------------------------------------------------------
# Column types
# ---------------------------------------------------------------------------

# none_as_null: Python None is SQL NULL ("absent"), {} / [] stay JSON values
MetadataType = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")
TagListType = ARRAY(String(50)).with_variant(JSON(none_as_null=True), "sqlite")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AssetType(str, enum.Enum):
    server = "server"
    vm = "vm"
    nas = "nas"
    container = "container"
    network = "network"
    other = "other"


# ---------------------------------------------------------------------------
# Asset
# ---------------------------------------------------------------------------

class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # AssetType value
    hostname: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    metadata_: Mapped[Optional[dict]] = mapped_column("metadata", MetadataType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_assets_user_id", "user_id"),
        Index("ix_assets_user_id_type", "user_id", "type"),
    )


# ---------------------------------------------------------------------------
# AssetLog
# ---------------------------------------------------------------------------

class AssetLog(Base):
    __tablename__ = "asset_logs"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False
    )
    # Copied from the creating identity; not re-derived from the parent asset.
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[Optional[list[str]]] = mapped_column(TagListType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_asset_logs_user_id_asset_id", "user_id", "asset_id"),
        Index("ix_asset_logs_created_at", "created_at"),
    )
