"""
Schema-validated entity CRUD, list and query.

Outbound payloads are validated against the registry before any request;
inbound records are parsed into the entity's full-shape model.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from graphcms.adapters.http.base import BaseClient
from graphcms.core.errors import SchemaIssue, SchemaValidationError, SystemContentError
from graphcms.core.ports.store import EntityRef, ListOptions, PagedResult, Pagination
from graphcms.domain.entities import CmsModel, EntityRecord
from graphcms.domain.query import Query, validate_query

logger = logging.getLogger(__name__)


class EntityClient(BaseClient):
    """CRUD, list and query against named entity collections."""

    # --- Reads ---

    async def list(self, entity: str, options: ListOptions | None = None) -> list[EntityRecord]:
        page = await self.list_with_pagination(entity, options)
        return page.data

    async def list_with_pagination(
        self, entity: str, options: ListOptions | None = None
    ) -> PagedResult:
        """
        List records with pagination info.

        The store answers either with a raw array or with a
        `{data|records, pagination}` envelope. For a raw array the pagination
        is synthesized: limit defaults to the number of records, offset to 0,
        total is the number of records.
        """
        self._registry.entity(entity)
        options = options or ListOptions()
        response = await self._transport.request("GET", f"/{entity}", params=options.to_params())

        items, pagination = _split_list_response(entity, response)
        data = self._registry.parse_entities(entity, items)
        if pagination is None:
            return PagedResult(
                data=data,
                pagination=Pagination(
                    limit=options.limit if options.limit is not None else len(data),
                    offset=options.offset if options.offset is not None else 0,
                    total=len(data),
                ),
            )
        return PagedResult(
            data=data,
            pagination=Pagination(
                limit=int(pagination.get("limit") or len(data)),
                offset=int(pagination.get("offset") or 0),
                total=int(pagination.get("total") or len(data)),
            ),
        )

    async def get(self, entity: str, entity_id: str) -> EntityRecord:
        self._registry.entity(entity)
        result = await self._transport.request("GET", f"/{entity}/{entity_id}")
        return self._registry.parse_entity(entity, result)

    async def query(self, entity: str, query: Query | Mapping[str, Any]) -> list[EntityRecord]:
        """Validate, compile and run a query; inline traversal results are kept."""
        compiled = validate_query(entity, query, self._registry)
        response = await self._transport.request(
            "POST", f"/{entity}/query", body=compiled.to_wire()
        )
        items, _ = _split_list_response(entity, response)
        return self._registry.parse_entities(entity, items)

    # --- Writes ---

    async def create(self, entity: str, data: Mapping[str, Any] | CmsModel) -> EntityRecord:
        model = self._registry.validate_create(entity, data)
        result = await self._transport.request(
            "POST", f"/{entity}", body=_dump(model)
        )
        return self._registry.parse_entity(entity, result)

    async def update(
        self, entity: str, ref: EntityRef, data: Mapping[str, Any] | CmsModel
    ) -> EntityRecord:
        """Full replace (PUT); the body must satisfy the create shape."""
        entity_id = self._mutable_id(entity, ref)
        model = self._registry.validate_create(entity, data)
        result = await self._transport.request(
            "PUT", f"/{entity}/{entity_id}", body=_dump(model)
        )
        return self._registry.parse_entity(entity, result)

    async def patch(self, entity: str, ref: EntityRef, data: Mapping[str, Any]) -> EntityRecord:
        entity_id = self._mutable_id(entity, ref)
        body = self._registry.validate_partial(entity, data)
        result = await self._transport.request("PATCH", f"/{entity}/{entity_id}", body=body)
        return self._registry.parse_entity(entity, result)

    async def delete(self, entity: str, ref: EntityRef) -> None:
        """Delete a record; both an empty and a content-bearing success are accepted."""
        entity_id = self._mutable_id(entity, ref)
        await self._transport.request("DELETE", f"/{entity}/{entity_id}")

    def _mutable_id(self, entity: str, ref: EntityRef) -> str:
        """
        Resolve a mutation target to an id.

        A loaded record flagged is_system is rejected here, before any request.
        """
        self._registry.entity(entity)
        if isinstance(ref, EntityRecord):
            if getattr(ref, "is_system", None):
                logger.info("Rejected mutation of system %s %s", entity, ref.id)
                raise SystemContentError(entity)
            return ref.id
        return ref


def _dump(model: CmsModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _split_list_response(
    entity: str, response: Any
) -> tuple[list[Any], dict[str, Any] | None]:
    """Return (items, pagination) for either list response shape."""
    if response is None:
        return [], None
    if isinstance(response, list):
        return response, None
    if isinstance(response, dict):
        items = response.get("data")
        if items is None:
            items = response.get("records")
        if isinstance(items, list):
            pagination = response.get("pagination")
            return items, pagination if isinstance(pagination, dict) else None
    raise SchemaValidationError(
        f"{entity} list response",
        [SchemaIssue(loc="", msg="Expected an array or a {data, pagination} object")],
    )
