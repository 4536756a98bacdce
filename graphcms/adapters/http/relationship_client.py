"""
Typed relationship (edge) operations.

Paths:
    POST   /{entity}/{id}/relationships/{type}             {targetId, properties}
    GET    /{entity}/{id}/relationships/{type}?direction=
    PATCH  /{entity}/{id}/relationships/{type}/{targetId}  {properties}
    DELETE /{entity}/{id}/relationships/{type}/{targetId}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from graphcms.adapters.http.base import BaseClient
from graphcms.core.errors import SchemaIssue, SchemaValidationError
from graphcms.domain.relationships import (
    Direction,
    Relationship,
    RelationshipProperties,
    RelationshipResult,
)

DIRECTIONS = ("in", "out", "both")


class RelationshipClient(BaseClient):
    """Create, read, update and delete edges with validated properties."""

    async def create_relationship(
        self,
        source_entity: str,
        source_id: str,
        relationship: str,
        target_id: str,
        properties: Mapping[str, Any] | RelationshipProperties | None = None,
    ) -> RelationshipResult:
        self._registry.entity(source_entity)
        props = self._registry.validate_properties(relationship, properties)
        body = {
            "targetId": target_id,
            "properties": props.model_dump(mode="json", by_alias=True, exclude_unset=True),
        }
        result = await self._transport.request(
            "POST", _edge_path(source_entity, source_id, relationship), body=body
        )
        if not isinstance(result, dict) or "relationship" not in result:
            # Store echoed nothing useful; report what was sent
            target = result.get("target") if isinstance(result, dict) else None
            return RelationshipResult(Relationship(relationship, props), target)
        return self._parse_result(relationship, result, None)

    async def get_relationships(
        self,
        entity: str,
        entity_id: str,
        relationship: str,
        direction: Direction = "out",
        target_entity: str | None = None,
    ) -> list[RelationshipResult]:
        """
        Fetch edges of one type.

        When target_entity is given each target is parsed into that entity's
        model; otherwise the raw payload is passed through.
        """
        self._registry.entity(entity)
        self._registry.relationship(relationship)
        if target_entity is not None:
            self._registry.entity(target_entity)
        if direction not in DIRECTIONS:
            raise SchemaValidationError(
                f"{relationship} request",
                [SchemaIssue(loc="direction", msg="Must be one of in, out, both")],
            )

        results = await self._transport.request(
            "GET",
            _edge_path(entity, entity_id, relationship),
            params={"direction": direction},
        )
        return [self._parse_result(relationship, r, target_entity) for r in results or []]

    async def update_relationship(
        self,
        source_entity: str,
        source_id: str,
        relationship: str,
        target_id: str,
        properties: Mapping[str, Any],
    ) -> RelationshipResult:
        self._registry.entity(source_entity)
        patch = self._registry.validate_partial_properties(relationship, properties)
        result = await self._transport.request(
            "PATCH",
            f"{_edge_path(source_entity, source_id, relationship)}/{target_id}",
            body={"properties": patch},
        )
        if result is None:
            # Partial patch: construct without requiring the unsent fields
            props = self._registry.relationship(relationship).properties.model_construct(**patch)
            return RelationshipResult(Relationship(relationship, props), None)
        return self._parse_result(relationship, result, None)

    async def delete_relationship(
        self,
        source_entity: str,
        source_id: str,
        relationship: str,
        target_id: str,
    ) -> None:
        self._registry.entity(source_entity)
        self._registry.relationship(relationship)
        await self._transport.request(
            "DELETE", f"{_edge_path(source_entity, source_id, relationship)}/{target_id}"
        )

    def _parse_result(
        self, relationship: str, data: Any, target_entity: str | None
    ) -> RelationshipResult:
        if not isinstance(data, dict):
            raise SchemaValidationError(
                f"{relationship} result",
                [SchemaIssue(loc="", msg="Expected {relationship, target} object")],
            )
        edge = data.get("relationship") or {}
        props = self._registry.parse_properties(relationship, edge.get("properties"))
        target = data.get("target")
        if target_entity is not None and target is not None:
            target = self._registry.parse_entity(target_entity, target)
        return RelationshipResult(Relationship(edge.get("type", relationship), props), target)


def _edge_path(entity: str, entity_id: str, relationship: str) -> str:
    return f"/{entity}/{entity_id}/relationships/{relationship}"
