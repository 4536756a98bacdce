"""
Schema registry.

Single source of truth for the shape of every entity and every relationship's
properties. Clients consult it before serializing a request and after
deserializing a response; no other module validates store payloads directly.

Each entity has two validators: the full shape (records coming back from the
store) and the create shape (no id or timestamps). Each relationship has a
property model plus its declared endpoint entity types.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from graphcms.core.errors import SchemaIssue, SchemaValidationError
from graphcms.domain import entities as e
from graphcms.domain import relationships as r
from graphcms.domain.relationships import Direction

# --- Field lookup helpers ---


@lru_cache(maxsize=None)
def _field_lookup(model: type[BaseModel]) -> dict[str, tuple[str, FieldInfo]]:
    """Map both wire alias and attribute name to (attribute, field info)."""
    lookup: dict[str, tuple[str, FieldInfo]] = {}
    for attr, info in model.model_fields.items():
        lookup[attr] = (attr, info)
        if info.alias:
            lookup[info.alias] = (attr, info)
    return lookup


@lru_cache(maxsize=None)
def _adapter(model: type[BaseModel], attr: str) -> TypeAdapter[Any]:
    return TypeAdapter(model.model_fields[attr].annotation)


def wire_field_names(model: type[BaseModel]) -> frozenset[str]:
    """Wire names of a model's fields, excluding underscore-prefixed extras."""
    names = set()
    for attr, info in model.model_fields.items():
        name = info.alias or attr
        if not name.startswith("_"):
            names.add(name)
    return frozenset(names)


def _validate_partial(
    schema_name: str, model: type[BaseModel], data: Mapping[str, Any]
) -> dict[str, Any]:
    """Validate a subset of fields and return them keyed by wire name."""
    lookup = _field_lookup(model)
    issues: list[SchemaIssue] = []
    out: dict[str, Any] = {}

    for key, value in data.items():
        entry = lookup.get(key)
        if entry is None:
            issues.append(SchemaIssue(loc=key, msg="Unknown field"))
            continue
        attr, info = entry
        adapter = _adapter(model, attr)
        try:
            parsed = adapter.validate_python(value)
        except ValidationError as exc:
            for err in exc.errors():
                sub = ".".join(str(p) for p in err.get("loc", ()))
                loc = f"{key}.{sub}" if sub else key
                issues.append(SchemaIssue(loc=loc, msg=err.get("msg", "invalid")))
            continue
        out[info.alias or attr] = adapter.dump_python(parsed, mode="json")

    if issues:
        raise SchemaValidationError(schema_name, issues)
    return out


# --- Schemas ---


@dataclass(frozen=True)
class EntitySchema:
    """Full and create-shaped validators for one entity collection."""

    name: str
    model: type[e.EntityRecord]
    create_model: type[e.CmsModel]

    @property
    def field_names(self) -> frozenset[str]:
        return wire_field_names(self.model)


@dataclass(frozen=True)
class RelationshipSchema:
    """Property model and declared endpoints for one relationship type."""

    name: str
    source: str
    target: str
    properties: type[r.RelationshipProperties] = r.EmptyProperties

    @property
    def property_names(self) -> frozenset[str]:
        return wire_field_names(self.properties)

    def far_side(self, entity: str, direction: Direction) -> str | None:
        """
        Entity type reached by following this edge from `entity`.

        Returns None when the edge does not touch `entity` in that direction.
        """
        if direction in ("out", "both") and self.source == entity:
            return self.target
        if direction in ("in", "both") and self.target == entity:
            return self.source
        return None


class SchemaRegistry:
    """Lookup and validation for entities and relationships."""

    def __init__(
        self,
        entities: Iterable[EntitySchema],
        relationships: Iterable[RelationshipSchema],
    ) -> None:
        self._entities = {s.name: s for s in entities}
        self._relationships = {s.name: s for s in relationships}

    @property
    def entity_names(self) -> list[str]:
        return list(self._entities)

    @property
    def relationship_names(self) -> list[str]:
        return list(self._relationships)

    def has_entity(self, name: str) -> bool:
        return name in self._entities

    def has_relationship(self, name: str) -> bool:
        return name in self._relationships

    def entity(self, name: str) -> EntitySchema:
        schema = self._entities.get(name)
        if schema is None:
            raise SchemaValidationError(name, [SchemaIssue(loc="", msg=f'Unknown entity "{name}"')])
        return schema

    def relationship(self, name: str) -> RelationshipSchema:
        schema = self._relationships.get(name)
        if schema is None:
            raise SchemaValidationError(
                name, [SchemaIssue(loc="", msg=f'Unknown relationship "{name}"')]
            )
        return schema

    # --- Entities ---

    def parse_entity(self, name: str, data: Any) -> e.EntityRecord:
        """Parse a store record into its full-shape model."""
        schema = self.entity(name)
        try:
            return schema.model.model_validate(data)
        except ValidationError as exc:
            raise SchemaValidationError.from_pydantic(name, exc) from exc

    def parse_entities(self, name: str, items: Iterable[Any]) -> list[e.EntityRecord]:
        return [self.parse_entity(name, item) for item in items]

    def validate_create(self, name: str, data: Mapping[str, Any] | e.CmsModel) -> e.CmsModel:
        """
        Validate data against the create shape.

        Accepts a mapping (wire or attribute names) or a model instance, which
        is re-validated through its dumped form.
        """
        schema = self.entity(name)
        if isinstance(data, e.CmsModel):
            data = data.model_dump(by_alias=True, exclude_unset=True)
        try:
            return schema.create_model.model_validate(data)
        except ValidationError as exc:
            raise SchemaValidationError.from_pydantic(f"Create{name}", exc) from exc

    def validate_partial(self, name: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a partial update; unknown fields are rejected."""
        schema = self.entity(name)
        return _validate_partial(f"Partial{name}", schema.create_model, data)

    # --- Relationship properties ---

    def parse_properties(self, name: str, data: Mapping[str, Any] | None) -> r.RelationshipProperties:
        """
        Parse properties returned by the store.

        Keys the schema does not declare are dropped rather than rejected.
        """
        schema = self.relationship(name)
        lookup = _field_lookup(schema.properties)
        known = {k: v for k, v in (data or {}).items() if k in lookup}
        try:
            return schema.properties.model_validate(known)
        except ValidationError as exc:
            raise SchemaValidationError.from_pydantic(f"{name} properties", exc) from exc

    def validate_properties(
        self, name: str, data: Mapping[str, Any] | r.RelationshipProperties | None
    ) -> r.RelationshipProperties:
        """Validate properties about to be sent; unknown keys are rejected."""
        schema = self.relationship(name)
        if isinstance(data, r.RelationshipProperties):
            data = data.model_dump(by_alias=True, exclude_unset=True)
        try:
            return schema.properties.model_validate(data or {})
        except ValidationError as exc:
            raise SchemaValidationError.from_pydantic(f"{name} properties", exc) from exc

    def validate_partial_properties(self, name: str, data: Mapping[str, Any]) -> dict[str, Any]:
        schema = self.relationship(name)
        return _validate_partial(f"{name} properties", schema.properties, data)

    def validate_property_value(self, name: str, field: str, value: Any) -> None:
        """Check a single property value, as used in traversal filters."""
        self.validate_partial_properties(name, {field: value})


# --- Default registry ---

ENTITY_SCHEMAS = [
    EntitySchema("Content", e.Content, e.CreateContent),
    EntitySchema("Author", e.Author, e.CreateAuthor),
    EntitySchema("Category", e.Category, e.CreateCategory),
    EntitySchema("Media", e.Media, e.CreateMedia),
    EntitySchema("ContentBlock", e.ContentBlock, e.CreateContentBlock),
    EntitySchema("ContentRevision", e.ContentRevision, e.CreateContentRevision),
    EntitySchema("WorkflowState", e.WorkflowState, e.CreateWorkflowState),
    EntitySchema("Layout", e.Layout, e.CreateLayout),
    EntitySchema("LayoutPlacement", e.LayoutPlacement, e.CreateLayoutPlacement),
    EntitySchema("Block", e.Block, e.CreateBlock),
    EntitySchema("Page", e.Page, e.CreatePage),
    EntitySchema("PageSection", e.PageSection, e.CreatePageSection),
]

RELATIONSHIP_SCHEMAS = [
    # Content
    RelationshipSchema("AUTHORED_BY", "Content", "Author", r.AuthoredByProperties),
    RelationshipSchema("CATEGORIZED_AS", "Content", "Category", r.CategorizedAsProperties),
    RelationshipSchema("HAS_MEDIA", "Content", "Media", r.HasMediaProperties),
    RelationshipSchema("HAS_BLOCK", "Content", "ContentBlock", r.HasBlockProperties),
    RelationshipSchema("HAS_REVISION", "Content", "ContentRevision"),
    RelationshipSchema("REVISION_CREATED_BY", "ContentRevision", "Author"),
    # Workflow
    RelationshipSchema("HAS_STATE", "Content", "WorkflowState", r.HasStateProperties),
    RelationshipSchema(
        "STATE_TRANSITION", "WorkflowState", "WorkflowState", r.StateTransitionProperties
    ),
    # Layout
    RelationshipSchema("USES_LAYOUT", "Content", "Layout"),
    RelationshipSchema("HAS_PLACEMENT", "Content", "LayoutPlacement", r.PlacementProperties),
    RelationshipSchema("PAGE_HAS_PLACEMENT", "Page", "LayoutPlacement", r.PlacementProperties),
    RelationshipSchema("PLACEMENT_CONTAINS_BLOCK", "LayoutPlacement", "Block"),
    RelationshipSchema("PLACEMENT_CONTAINS_CONTENT_BLOCK", "LayoutPlacement", "ContentBlock"),
    # Block references
    RelationshipSchema("BLOCK_REFERENCES_MEDIA", "ContentBlock", "Media"),
    RelationshipSchema("BLOCK_REFERENCES_CONTENT", "ContentBlock", "Content"),
    RelationshipSchema("BLOCK_REFERENCES_AUTHOR", "ContentBlock", "Author"),
    # Hierarchies
    RelationshipSchema("PAGE_PARENT", "Page", "Page"),
    RelationshipSchema("CATEGORY_PARENT", "Category", "Category"),
    # Pages
    RelationshipSchema("PAGE_USES_LAYOUT", "Page", "Layout"),
    RelationshipSchema("PAGE_HAS_SECTION", "Page", "PageSection"),
    RelationshipSchema("PAGE_FILTERS_CATEGORY", "Page", "Category"),
    RelationshipSchema(
        "SECTION_HAS_CONTENT", "PageSection", "Content", r.SectionHasContentProperties
    ),
    RelationshipSchema("SECTION_HAS_BLOCK", "PageSection", "Block"),
]

DEFAULT_REGISTRY = SchemaRegistry(ENTITY_SCHEMAS, RELATIONSHIP_SCHEMAS)
