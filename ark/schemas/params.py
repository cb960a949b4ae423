"""
Query-parameter objects for list endpoints.

These are mutable on purpose: set_defaults() fills and clamps values in
place before the object reaches the repository layer. It never raises;
invalid sort values are rejected later by the repository.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

DEFAULT_ASSET_LIMIT = 20
MAX_ASSET_LIMIT = 100

DEFAULT_LOG_LIMIT = 50
MAX_LOG_LIMIT = 200

DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


class _ListParams(BaseModel):
    limit: int = 0
    offset: int = 0
    search: Optional[str] = None
    sort_by: str = ""
    sort_order: str = ""

    def _apply_defaults(self, default_limit: int, max_limit: int) -> None:
        if self.limit == 0:
            self.limit = default_limit
        if self.limit > max_limit:
            self.limit = max_limit
        if self.offset < 0:
            self.offset = 0
        if not self.sort_by:
            self.sort_by = DEFAULT_SORT_BY
        if not self.sort_order:
            self.sort_order = DEFAULT_SORT_ORDER


class AssetQueryParams(_ListParams):
    type: Optional[str] = None

    def set_defaults(self, default_limit: int = DEFAULT_ASSET_LIMIT) -> "AssetQueryParams":
        self._apply_defaults(default_limit, MAX_ASSET_LIMIT)
        return self


class LogQueryParams(_ListParams):
    tags: list[str] = []
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    def set_defaults(self, default_limit: int = DEFAULT_LOG_LIMIT) -> "LogQueryParams":
        self._apply_defaults(default_limit, MAX_LOG_LIMIT)
        return self


def pagination_meta(total: int, limit: int, offset: int) -> dict:
    return {
        "total": total,
        "limit": limit,
        "offset": offset,
        "has_next": offset + limit < total,
        "has_prev": offset > 0,
    }
