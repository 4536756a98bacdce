"""
Relationship property models.

Each relationship type owns one property model. Types with no properties
share EmptyProperties, which still rejects unknown keys.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict

from graphcms.domain.entities import CmsModel

Direction = Literal["in", "out", "both"]
AuthorRole = Literal["PRIMARY", "CONTRIBUTOR", "EDITOR"]
MediaRole = Literal["FEATURED", "GALLERY", "INLINE", "ATTACHMENT"]


class RelationshipProperties(CmsModel):
    model_config = ConfigDict(extra="forbid")


class EmptyProperties(RelationshipProperties):
    pass


class AuthoredByProperties(RelationshipProperties):
    role: AuthorRole
    byline: str | None = None


class CategorizedAsProperties(RelationshipProperties):
    featured: bool | None = None
    position: float | None = None


class HasMediaProperties(RelationshipProperties):
    role: MediaRole
    position: float | None = None
    caption: str | None = None


class HasBlockProperties(RelationshipProperties):
    position: int


class HasStateProperties(RelationshipProperties):
    assigned_at: datetime
    assigned_by: str | None = None


class StateTransitionProperties(RelationshipProperties):
    requires_approval: bool | None = None
    notify_roles: list[str] | None = None


class PlacementProperties(RelationshipProperties):
    region: str
    position: int


class SectionHasContentProperties(RelationshipProperties):
    position: int | None = None


@dataclass(frozen=True)
class Relationship:
    """Edge as returned by the store: type plus parsed properties."""

    type: str
    properties: RelationshipProperties = field(default_factory=EmptyProperties)


@dataclass(frozen=True)
class RelationshipResult:
    """One edge and the entity on its far side."""

    relationship: Relationship
    # Parsed entity when the target type is known, raw payload otherwise
    target: Any
