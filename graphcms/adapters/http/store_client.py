"""
Store client: the StorePort implementation used in production.

    async with create_store_client() as store:
        posts = await store.query("Content", Query(where=where_content_type("POST")))
"""

from __future__ import annotations

import httpx

from graphcms.adapters.http.entity_client import EntityClient
from graphcms.adapters.http.relationship_client import RelationshipClient
from graphcms.adapters.http.transport import StoreTransport
from graphcms.domain.registry import DEFAULT_REGISTRY, SchemaRegistry
from graphcms.settings.loader import load_store_config
from graphcms.settings.models import StoreConfig


class StoreClient(EntityClient, RelationshipClient):
    """Entity and relationship operations over one HTTP connection pool."""

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> StoreClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_store_client(
    config: StoreConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
) -> StoreClient:
    """
    Build a client. Without a config, connection details come from the
    environment (see load_store_config).
    """
    config = config or load_store_config()
    return StoreClient(StoreTransport(config, transport=transport), registry)
