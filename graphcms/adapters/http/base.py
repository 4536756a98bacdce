from __future__ import annotations

from graphcms.adapters.http.transport import StoreTransport
from graphcms.domain.registry import DEFAULT_REGISTRY, SchemaRegistry


class BaseClient:
    """Shared state for the entity and relationship clients."""

    def __init__(
        self,
        transport: StoreTransport,
        registry: SchemaRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._transport = transport
        self._registry = registry

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry
