"""
Store port.

The interface every component depends on. The HTTP client in
graphcms.adapters.http implements it against the remote store; tests use an
in-memory implementation.

Contract:
- Payloads are validated against the schema registry before any request.
- Non-success responses raise StoreError (status_code 0 when no response).
- Mutating calls given a loaded entity with is_system set raise
  SystemContentError without issuing a request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from graphcms.domain.entities import CmsModel, EntityRecord, OrderDirection
from graphcms.domain.query import Query
from graphcms.domain.relationships import (
    Direction,
    RelationshipProperties,
    RelationshipResult,
)

EntityRef = str | EntityRecord


@dataclass(frozen=True)
class ListOptions:
    """Paging and ordering for list calls."""

    limit: int | None = None
    offset: int | None = None
    order_by: str | None = None
    order_direction: OrderDirection | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.limit is not None:
            params["limit"] = self.limit
        if self.offset is not None:
            params["offset"] = self.offset
        if self.order_by is not None:
            params["orderBy"] = self.order_by
        if self.order_direction is not None:
            params["orderDirection"] = self.order_direction
        return params


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int
    total: int


@dataclass(frozen=True)
class PagedResult:
    """Records plus a pagination descriptor."""

    data: list[EntityRecord]
    pagination: Pagination


class StorePort(Protocol):
    """Schema-validated access to entities and relationships."""

    # --- Entities ---

    async def list(self, entity: str, options: ListOptions | None = None) -> list[EntityRecord]:
        """List records; both response shapes normalize to a list."""
        ...

    async def list_with_pagination(self, entity: str, options: ListOptions | None = None) -> PagedResult:
        """List records with a pagination descriptor (synthesized if absent)."""
        ...

    async def get(self, entity: str, entity_id: str) -> EntityRecord:
        """Get one record. A missing record raises StoreError(404)."""
        ...

    async def create(self, entity: str, data: Mapping[str, Any] | CmsModel) -> EntityRecord:
        """Validate against the create shape, then create."""
        ...

    async def update(
        self, entity: str, ref: EntityRef, data: Mapping[str, Any] | CmsModel
    ) -> EntityRecord:
        """Full replace, validated against the create shape."""
        ...

    async def patch(self, entity: str, ref: EntityRef, data: Mapping[str, Any]) -> EntityRecord:
        """Partial update; each given field is validated."""
        ...

    async def delete(self, entity: str, ref: EntityRef) -> None:
        """Delete a record."""
        ...

    async def query(self, entity: str, query: Query | Mapping[str, Any]) -> list[EntityRecord]:
        """Validate and run a query/traversal request."""
        ...

    # --- Relationships ---

    async def create_relationship(
        self,
        source_entity: str,
        source_id: str,
        relationship: str,
        target_id: str,
        properties: Mapping[str, Any] | RelationshipProperties | None = None,
    ) -> RelationshipResult:
        """Validate properties, then create an edge."""
        ...

    async def get_relationships(
        self,
        entity: str,
        entity_id: str,
        relationship: str,
        direction: Direction = "out",
        target_entity: str | None = None,
    ) -> list[RelationshipResult]:
        """Edges of one type; targets parsed when target_entity is given."""
        ...

    async def update_relationship(
        self,
        source_entity: str,
        source_id: str,
        relationship: str,
        target_id: str,
        properties: Mapping[str, Any],
    ) -> RelationshipResult:
        """Patch edge properties."""
        ...

    async def delete_relationship(
        self,
        source_entity: str,
        source_id: str,
        relationship: str,
        target_id: str,
    ) -> None:
        """Remove the edge identified by source, type and target."""
        ...
