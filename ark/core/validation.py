"""
Handwritten business validation that runs after pydantic field validation.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from ark.core.errors import BadRequestError
from ark.models.models import AssetType

ASSET_TYPES = frozenset(t.value for t in AssetType)

MAX_TAGS = 20
MAX_TAG_LENGTH = 50


def validate_asset_type(value: Optional[str]) -> None:
    if value is None:
        return
    if value not in ASSET_TYPES:
        raise BadRequestError(f"invalid asset type: {value}")


def validate_metadata_json(value: Any) -> Optional[dict]:
    """
    Ensure metadata is absent or a JSON object.

    Accepts either an already-decoded value (request bodies) or raw JSON
    text/bytes. Returns the decoded object, or None when absent.
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes, bytearray)):
        try:
            value = json.loads(value)
        except ValueError:
            raise BadRequestError("metadata must be valid JSON")
    if not isinstance(value, dict):
        raise BadRequestError("metadata must be a JSON object")
    return value


def normalize_tags(tags: Optional[list[str]]) -> Optional[list[str]]:
    """
    Trim, lowercase and dedupe tags, keeping first-occurrence order,
    capped at MAX_TAGS. None stays None; [] stays [].
    """
    if tags is None:
        return None
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        clean = tag.strip().lower()
        if clean and clean not in seen:
            seen.add(clean)
            result.append(clean)
    return result[:MAX_TAGS]


# ── Sorting ────────────────────────────────────────────────────────────
# ORDER BY identifiers cannot be bound as parameters, so only these exact
# values ever reach query construction.

ASSET_SORT_FIELDS = ("name", "created_at", "updated_at")
LOG_SORT_FIELDS = ("created_at", "updated_at")
SORT_ORDERS = ("asc", "desc")


def validate_sort_params(sort_by: str, sort_order: str, allowed_fields: tuple[str, ...]) -> None:
    if sort_by not in allowed_fields:
        raise BadRequestError(f"invalid sort_by: {sort_by}")
    if sort_order not in SORT_ORDERS:
        raise BadRequestError(f"invalid sort_order: {sort_order}")
