"""
Content component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphcms.domain.entities import Author, Category, Content, Media
from graphcms.domain.relationships import (
    AuthoredByProperties,
    AuthorRole,
    HasMediaProperties,
    MediaRole,
    RelationshipResult,
)


@dataclass(frozen=True)
class AuthorCredit:
    author: Author
    role: AuthorRole
    byline: str | None = None


@dataclass(frozen=True)
class MediaAttachment:
    media: Media
    role: MediaRole
    position: float | None = None
    caption: str | None = None


@dataclass(frozen=True)
class CategoryAssignment:
    category: Category
    featured: bool | None = None
    position: float | None = None


@dataclass(frozen=True)
class ContentWithPrimaryAuthor:
    content: Content
    author: Author | None
    author_props: AuthoredByProperties | None


@dataclass(frozen=True)
class ContentWithFeaturedImage:
    content: Content
    featured_image: Media | None
    media_props: HasMediaProperties | None


@dataclass(frozen=True)
class ContentWithRelations:
    """Content plus its outgoing edges, keyed by relationship type."""

    content: Content
    relationships: dict[str, list[RelationshipResult]] = field(default_factory=dict)

    def targets(self, relationship: str) -> list:
        return [r.target for r in self.relationships.get(relationship, [])]
