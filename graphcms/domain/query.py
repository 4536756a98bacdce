"""
Query and traversal request algebra.

A Query is built client-side, checked against the schema registry by
validate_query, then compiled with to_wire() and posted to the store's
`{entity}/query` endpoint. Traversal steps nest to any depth; execution is
entirely server-side.

Wire shape:
    where:    {field: {$op: value}, $and: [where...], $or: [where...]}
    traverse: {relationship, direction, where?, traverse?, include?, limit?,
               offset?, orderBy?, orderDirection?}
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from graphcms.core.errors import QueryValidationError, SchemaValidationError
from graphcms.domain.entities import ContentType, OrderDirection
from graphcms.domain.registry import DEFAULT_REGISTRY, SchemaRegistry
from graphcms.domain.relationships import AuthorRole, Direction, MediaRole

Operator = Literal["$eq", "$ne", "$gt", "$gte", "$lt", "$lte", "$in", "$nin", "$contains"]

OPERATORS: frozenset[str] = frozenset(
    ["$eq", "$ne", "$gt", "$gte", "$lt", "$lte", "$in", "$nin", "$contains"]
)
SET_OPERATORS: frozenset[str] = frozenset(["$in", "$nin"])
DIRECTIONS: frozenset[str] = frozenset(["in", "out", "both"])
ORDER_DIRECTIONS: frozenset[str] = frozenset(["ASC", "DESC"])


def _wire_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_wire_value(v) for v in value]
    return value


# --- Filter tree ---


@dataclass(frozen=True)
class FieldFilter:
    """Single predicate: `field op value`."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class Where:
    """Filter node: field predicates ANDed together, plus $and / $or children."""

    filters: tuple[FieldFilter, ...] = ()
    all_of: tuple[Where, ...] = ()
    any_of: tuple[Where, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in self.filters:
            out.setdefault(f.field, {})[f.op] = _wire_value(f.value)
        if self.all_of:
            out["$and"] = [w.to_wire() for w in self.all_of]
        if self.any_of:
            out["$or"] = [w.to_wire() for w in self.any_of]
        return out

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Where:
        """
        Parse a wire-shaped filter.

        A bare value (not an operator map) is read as $eq.
        """
        filters: list[FieldFilter] = []
        all_of: tuple[Where, ...] = ()
        any_of: tuple[Where, ...] = ()
        for key, value in data.items():
            if key == "$and":
                all_of = tuple(cls.from_wire(w) for w in value)
            elif key == "$or":
                any_of = tuple(cls.from_wire(w) for w in value)
            elif isinstance(value, Mapping) and value and all(
                str(k).startswith("$") for k in value
            ):
                filters.extend(FieldFilter(key, op, v) for op, v in value.items())
            else:
                filters.append(FieldFilter(key, "$eq", value))
        return cls(tuple(filters), all_of, any_of)

    def __and__(self, other: Where) -> Where:
        return and_(self, other)

    def __or__(self, other: Where) -> Where:
        return or_(self, other)


# --- Traversal / Query ---


@dataclass(frozen=True)
class Traversal:
    """One relationship hop; may nest further hops."""

    relationship: str
    direction: Direction = "out"
    where: Where | None = None
    traverse: tuple[Traversal, ...] = ()
    include: bool | None = None
    limit: int | None = None
    offset: int | None = None
    order_by: str | None = None
    order_direction: OrderDirection | None = None

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {"relationship": self.relationship, "direction": self.direction}
        if self.where is not None:
            out["where"] = self.where.to_wire()
        if self.traverse:
            out["traverse"] = [t.to_wire() for t in self.traverse]
        if self.include is not None:
            out["include"] = self.include
        if self.limit is not None:
            out["limit"] = self.limit
        if self.offset is not None:
            out["offset"] = self.offset
        if self.order_by is not None:
            out["orderBy"] = self.order_by
        if self.order_direction is not None:
            out["orderDirection"] = self.order_direction
        return out

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Traversal:
        where = data.get("where")
        return cls(
            relationship=data["relationship"],
            direction=data.get("direction", "out"),
            where=Where.from_wire(where) if where is not None else None,
            traverse=tuple(cls.from_wire(t) for t in data.get("traverse") or ()),
            include=data.get("include"),
            limit=data.get("limit"),
            offset=data.get("offset"),
            order_by=data.get("orderBy"),
            order_direction=data.get("orderDirection"),
        )

    def including(
        self,
        limit: int | None = None,
        offset: int | None = None,
        order_by: str | None = None,
        order_direction: OrderDirection | None = None,
    ) -> Traversal:
        """Copy of this step that returns the related entities inline."""
        return Traversal(
            relationship=self.relationship,
            direction=self.direction,
            where=self.where,
            traverse=self.traverse,
            include=True,
            limit=limit,
            offset=offset,
            order_by=order_by,
            order_direction=order_direction,
        )


@dataclass(frozen=True)
class Query:
    """Request body for `{entity}/query`."""

    where: Where | None = None
    select: tuple[str, ...] = ()
    limit: int | None = None
    offset: int | None = None
    order_by: str | None = None
    order_direction: OrderDirection | None = None
    traverse: tuple[Traversal, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.where is not None:
            out["where"] = self.where.to_wire()
        if self.select:
            out["select"] = list(self.select)
        if self.limit is not None:
            out["limit"] = self.limit
        if self.offset is not None:
            out["offset"] = self.offset
        if self.order_by is not None:
            out["orderBy"] = self.order_by
        if self.order_direction is not None:
            out["orderDirection"] = self.order_direction
        if self.traverse:
            out["traverse"] = [t.to_wire() for t in self.traverse]
        return out

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Query:
        where = data.get("where")
        return cls(
            where=Where.from_wire(where) if where is not None else None,
            select=tuple(data.get("select") or ()),
            limit=data.get("limit"),
            offset=data.get("offset"),
            order_by=data.get("orderBy"),
            order_direction=data.get("orderDirection"),
            traverse=tuple(Traversal.from_wire(t) for t in data.get("traverse") or ()),
        )


def as_query(query: Query | Mapping[str, Any]) -> Query:
    return query if isinstance(query, Query) else Query.from_wire(query)


# --- Builders ---


def where_field(field: str, op: Operator, value: Any) -> Where:
    return Where(filters=(FieldFilter(field, op, value),))


def eq(field: str, value: Any) -> Where:
    return where_field(field, "$eq", value)


def and_(*wheres: Where) -> Where:
    return Where(all_of=tuple(wheres))


def or_(*wheres: Where) -> Where:
    return Where(any_of=tuple(wheres))


def where_slug(slug: str) -> Where:
    return eq("slug", slug)


def where_has_tag(tag: str) -> Where:
    return where_field("tags", "$contains", tag)


def where_content_type(content_type: ContentType) -> Where:
    return eq("contentType", content_type)


def traverse_authors(role: AuthorRole | None = None) -> Traversal:
    return Traversal("AUTHORED_BY", "out", where=eq("role", role) if role else None)


def traverse_media(role: MediaRole | None = None) -> Traversal:
    return Traversal("HAS_MEDIA", "out", where=eq("role", role) if role else None)


def traverse_categories(featured_only: bool = False) -> Traversal:
    return Traversal("CATEGORIZED_AS", "out", where=eq("featured", True) if featured_only else None)


def traverse_blocks() -> Traversal:
    return Traversal("HAS_BLOCK", "out")


def traverse_state() -> Traversal:
    return Traversal("HAS_STATE", "out")


# --- Validation ---


def validate_query(
    entity: str,
    query: Query | Mapping[str, Any],
    registry: SchemaRegistry = DEFAULT_REGISTRY,
) -> Query:
    """
    Type-check a query against the registry.

    Returns the normalized Query.

    Raises:
        QueryValidationError: With a dotted path to the offending part.
    """
    query = as_query(query)
    if not registry.has_entity(entity):
        raise QueryValidationError(entity, "", f'Unknown entity "{entity}"')

    fields = registry.entity(entity).field_names
    if query.where is not None:
        _check_where(entity, query.where, "where", fields, registry)
    for i, name in enumerate(query.select):
        if name not in fields:
            raise QueryValidationError(entity, f"select[{i}]", f'Unknown field "{name}" on {entity}')
    _check_paging(entity, "", query.limit, query.offset, query.order_by, query.order_direction, fields)
    for i, step in enumerate(query.traverse):
        _check_traversal(entity, entity, step, f"traverse[{i}]", registry)
    return query


def _join(path: str, part: str) -> str:
    return f"{path}.{part}" if path else part


def _check_paging(
    entity: str,
    path: str,
    limit: int | None,
    offset: int | None,
    order_by: str | None,
    order_direction: str | None,
    fields: frozenset[str],
) -> None:
    if limit is not None and limit < 0:
        raise QueryValidationError(entity, _join(path, "limit"), "Must be >= 0")
    if offset is not None and offset < 0:
        raise QueryValidationError(entity, _join(path, "offset"), "Must be >= 0")
    if order_by is not None and order_by not in fields:
        raise QueryValidationError(entity, _join(path, "orderBy"), f'Unknown field "{order_by}"')
    if order_direction is not None and order_direction not in ORDER_DIRECTIONS:
        raise QueryValidationError(
            entity, _join(path, "orderDirection"), "Must be one of ASC, DESC"
        )


def _check_where(
    entity: str,
    where: Where,
    path: str,
    fields: frozenset[str],
    registry: SchemaRegistry,
    relationship: str | None = None,
) -> None:
    """
    Check every predicate in a filter tree.

    Inside a traversal, `relationship` names the edge; predicates on its
    property names are also value-checked against the property schema.
    """
    props = registry.relationship(relationship).property_names if relationship else frozenset()

    for f in where.filters:
        loc = _join(path, f.field)
        if f.field not in fields and f.field not in props:
            target = f"{relationship} or its target" if relationship else entity
            raise QueryValidationError(entity, loc, f'Unknown field "{f.field}" on {target}')
        if f.op not in OPERATORS:
            raise QueryValidationError(entity, loc, f'Unknown operator "{f.op}"')
        if f.op in SET_OPERATORS and (
            isinstance(f.value, (str, bytes)) or not isinstance(f.value, (Sequence, set, frozenset))
        ):
            raise QueryValidationError(entity, loc, f"Operator {f.op} expects a list")
        if f.field in props and f.op != "$contains":
            values = f.value if f.op in SET_OPERATORS else [f.value]
            for value in values:
                try:
                    registry.validate_property_value(relationship, f.field, value)
                except SchemaValidationError as exc:
                    msg = exc.issues[0].msg if exc.issues else str(exc)
                    raise QueryValidationError(entity, loc, msg) from exc

    for i, child in enumerate(where.all_of):
        _check_where(entity, child, _join(path, f"$and[{i}]"), fields, registry, relationship)
    for i, child in enumerate(where.any_of):
        _check_where(entity, child, _join(path, f"$or[{i}]"), fields, registry, relationship)


def _check_traversal(
    root: str,
    current: str,
    step: Traversal,
    path: str,
    registry: SchemaRegistry,
) -> None:
    if not registry.has_relationship(step.relationship):
        raise QueryValidationError(
            root, _join(path, "relationship"), f'Unknown relationship "{step.relationship}"'
        )
    if step.direction not in DIRECTIONS:
        raise QueryValidationError(root, _join(path, "direction"), "Must be one of in, out, both")

    schema = registry.relationship(step.relationship)
    far = schema.far_side(current, step.direction)
    if far is None:
        raise QueryValidationError(
            root,
            _join(path, "relationship"),
            f'{step.relationship} does not connect {current} in direction "{step.direction}"',
        )

    far_fields = registry.entity(far).field_names
    if step.where is not None:
        _check_where(root, step.where, _join(path, "where"), far_fields, registry, step.relationship)
    _check_paging(
        root, path, step.limit, step.offset, step.order_by, step.order_direction, far_fields
    )
    for i, child in enumerate(step.traverse):
        _check_traversal(root, far, child, _join(path, f"traverse[{i}]"), registry)
