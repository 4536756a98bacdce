"""
Content component - Read-side composition for content items.

Lookups by slug, tag and workflow state, plus the author, media and category
edges that hang off a content item.
"""

from __future__ import annotations

import asyncio
import math

from graphcms.components.workflow.component import get_content_by_state, get_content_state
from graphcms.core.errors import StoreError
from graphcms.core.ports.store import ListOptions, StorePort
from graphcms.domain.entities import Content, ContentType, OrderDirection
from graphcms.domain.query import Query, and_, eq, where_has_tag, where_slug
from graphcms.domain.relationships import MediaRole
from graphcms.settings.models import WorkflowSettings

from .models import (
    AuthorCredit,
    CategoryAssignment,
    ContentWithFeaturedImage,
    ContentWithPrimaryAuthor,
    ContentWithRelations,
    MediaAttachment,
)

# Outgoing edges loaded by get_content_with_relations, with their target types
CONTENT_RELATIONS: dict[str, str] = {
    "AUTHORED_BY": "Author",
    "HAS_MEDIA": "Media",
    "CATEGORIZED_AS": "Category",
    "HAS_BLOCK": "ContentBlock",
    "HAS_STATE": "WorkflowState",
    "USES_LAYOUT": "Layout",
}


async def get_content_by_slug(store: StorePort, slug: str) -> Content | None:
    results = await store.query("Content", Query(where=where_slug(slug), limit=1))
    return results[0] if results else None


async def get_content_with_primary_author(
    store: StorePort, content_id: str
) -> ContentWithPrimaryAuthor:
    content = await store.get("Content", content_id)
    rels = await store.get_relationships("Content", content_id, "AUTHORED_BY", "out", "Author")
    primary = next((r for r in rels if r.relationship.properties.role == "PRIMARY"), None)
    return ContentWithPrimaryAuthor(
        content=content,
        author=primary.target if primary else None,
        author_props=primary.relationship.properties if primary else None,
    )


async def get_content_with_featured_image(
    store: StorePort, content_id: str
) -> ContentWithFeaturedImage:
    content = await store.get("Content", content_id)
    rels = await store.get_relationships("Content", content_id, "HAS_MEDIA", "out", "Media")
    featured = next((r for r in rels if r.relationship.properties.role == "FEATURED"), None)
    return ContentWithFeaturedImage(
        content=content,
        featured_image=featured.target if featured else None,
        media_props=featured.relationship.properties if featured else None,
    )


async def get_content_authors(store: StorePort, content_id: str) -> list[AuthorCredit]:
    rels = await store.get_relationships("Content", content_id, "AUTHORED_BY", "out", "Author")
    return [
        AuthorCredit(
            author=r.target,
            role=r.relationship.properties.role,
            byline=r.relationship.properties.byline,
        )
        for r in rels
    ]


async def get_content_media(
    store: StorePort, content_id: str, role: MediaRole | None = None
) -> list[MediaAttachment]:
    """Media of a content item, optionally one role only; unpositioned items last."""
    rels = await store.get_relationships("Content", content_id, "HAS_MEDIA", "out", "Media")
    if role:
        rels = [r for r in rels if r.relationship.properties.role == role]

    def position(r) -> float:
        pos = r.relationship.properties.position
        return math.inf if pos is None else pos

    return [
        MediaAttachment(
            media=r.target,
            role=r.relationship.properties.role,
            position=r.relationship.properties.position,
            caption=r.relationship.properties.caption,
        )
        for r in sorted(rels, key=position)
    ]


async def get_content_categories(store: StorePort, content_id: str) -> list[CategoryAssignment]:
    rels = await store.get_relationships(
        "Content", content_id, "CATEGORIZED_AS", "out", "Category"
    )
    return [
        CategoryAssignment(
            category=r.target,
            featured=r.relationship.properties.featured,
            position=r.relationship.properties.position,
        )
        for r in rels
    ]


async def search_content_by_tag(
    store: StorePort, tag: str, limit: int | None = None
) -> list[Content]:
    return await store.query(
        "Content",
        Query(where=where_has_tag(tag), order_by="updatedAt", order_direction="DESC", limit=limit),
    )


async def get_content_with_relations(
    store: StorePort, content_id: str
) -> ContentWithRelations | None:
    """
    Content and all of its outgoing edges, or None if it does not exist.

    The edge lists are fetched concurrently.
    """
    try:
        content = await store.get("Content", content_id)
    except StoreError as e:
        if e.is_not_found:
            return None
        raise

    names = list(CONTENT_RELATIONS)
    results = await asyncio.gather(
        *(
            store.get_relationships("Content", content_id, name, "out", CONTENT_RELATIONS[name])
            for name in names
        )
    )
    return ContentWithRelations(content=content, relationships=dict(zip(names, results)))


async def list_all_content(
    store: StorePort,
    limit: int | None = None,
    offset: int | None = None,
    order_by: str = "updatedAt",
    order_direction: OrderDirection = "DESC",
) -> list[Content]:
    return await store.list(
        "Content",
        ListOptions(
            limit=limit, offset=offset, order_by=order_by, order_direction=order_direction
        ),
    )


async def get_published_content(
    store: StorePort,
    limit: int | None = None,
    offset: int = 0,
    settings: WorkflowSettings | None = None,
) -> list[Content]:
    """
    Content in the published state, newest update first.

    Items sharing a slug are collapsed to the most recently updated one.
    Paging applies after collapsing.
    """
    settings = settings or WorkflowSettings()
    published = await get_content_by_state(store, settings.published_slug, limit=None)

    by_slug: dict[str, Content] = {}
    for content in published:
        existing = by_slug.get(content.slug)
        if existing is None or content.updated_at > existing.updated_at:
            by_slug[content.slug] = content

    ordered = sorted(by_slug.values(), key=lambda c: c.updated_at, reverse=True)
    end = None if limit is None else offset + limit
    return ordered[offset:end]


async def get_draft_content(
    store: StorePort, limit: int = 100, offset: int = 0
) -> list[Content]:
    return await get_content_by_state(store, "draft", limit=limit, offset=offset)


async def get_published_content_by_slug_and_type(
    store: StorePort,
    slug: str,
    content_type: ContentType,
    settings: WorkflowSettings | None = None,
) -> ContentWithRelations | None:
    """Content with relations, only if it exists and is currently published."""
    settings = settings or WorkflowSettings()
    results = await store.query(
        "Content",
        Query(where=and_(eq("slug", slug), eq("contentType", content_type)), limit=1),
    )
    if not results:
        return None

    content = results[0]
    current = await get_content_state(store, content.id)
    if current is None or current.state.slug != settings.published_slug:
        return None
    return await get_content_with_relations(store, content.id)
