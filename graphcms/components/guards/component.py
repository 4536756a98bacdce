"""
Guards component - Protection of seeded system content.

Records flagged isSystem are demo data and must not be modified. The store
client rejects mutations of loaded records on its own; these helpers cover
callers that only hold an id.
"""

from __future__ import annotations

from typing import Any

from graphcms.core.errors import StoreError, SystemContentError, system_content_message
from graphcms.core.ports.store import StorePort


async def ensure_mutable(store: StorePort, entity: str, entity_id: str) -> None:
    """
    Raise if the record is system content.

    Raises:
        SystemContentError: The record has isSystem set.
        StoreError: The record could not be fetched.
    """
    record = await store.get(entity, entity_id)
    if getattr(record, "is_system", None) is True:
        raise SystemContentError(entity)


async def is_mutable(store: StorePort, entity: str, entity_id: str) -> bool:
    """
    True unless the record is system content.

    A missing record counts as mutable; the actual operation will fail.
    """
    try:
        record = await store.get(entity, entity_id)
    except StoreError as e:
        if e.is_not_found:
            return True
        raise
    return getattr(record, "is_system", None) is not True


def system_content_response(entity: str) -> dict[str, Any]:
    """Body for a 403 response."""
    return {
        "message": system_content_message(entity),
        "code": SystemContentError.code,
    }
