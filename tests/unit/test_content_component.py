"""
Content composition tests against the in-memory store.
"""

from __future__ import annotations

import pytest

from graphcms.components.content import (
    get_content_authors,
    get_content_by_slug,
    get_content_categories,
    get_content_media,
    get_content_with_featured_image,
    get_content_with_primary_author,
    get_content_with_relations,
    get_draft_content,
    get_published_content,
    get_published_content_by_slug_and_type,
    list_all_content,
    search_content_by_tag,
)
from graphcms.core.errors import StoreError
from tests.fakes import BASE_TIME, InMemoryStore


def seed_content(store: InMemoryStore, slug: str, **fields):
    data = {"title": slug.title(), "slug": slug, "contentType": "POST", **fields}
    return store.seed("Content", **data)


async def put_in_state(store: InMemoryStore, content, state) -> None:
    await store.create_relationship(
        "Content", content.id, "HAS_STATE", state.id, {"assignedAt": BASE_TIME}
    )


@pytest.fixture
def post(store: InMemoryStore):
    return seed_content(store, "post", tags=["python", "graphs"])


class TestLookups:
    """Lookups by slug, tag and listing."""

    @pytest.mark.asyncio
    async def test_by_slug(self, store: InMemoryStore, post) -> None:
        """Slug lookup finds the item or returns None."""
        assert (await get_content_by_slug(store, "post")).id == post.id
        assert await get_content_by_slug(store, "missing") is None

    @pytest.mark.asyncio
    async def test_by_tag(self, store: InMemoryStore, post) -> None:
        """Tag search matches list membership."""
        seed_content(store, "other", tags=["rust"])
        assert [c.slug for c in await search_content_by_tag(store, "python")] == ["post"]

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, store: InMemoryStore, post) -> None:
        """Default listing is by updatedAt descending."""
        seed_content(store, "newer")
        assert [c.slug for c in await list_all_content(store)] == ["newer", "post"]
        assert [c.slug for c in await list_all_content(store, limit=1, offset=1)] == ["post"]


class TestRelations:
    """Author, media and category edges."""

    @pytest.mark.asyncio
    async def test_primary_author(self, store: InMemoryStore, post) -> None:
        """The PRIMARY author is picked out of several."""
        helper = store.seed("Author", name="Bob", email="bob@example.com")
        lead = store.seed("Author", name="Ada", email="ada@example.com")
        await store.create_relationship("Content", post.id, "AUTHORED_BY", helper.id, {"role": "CONTRIBUTOR"})
        await store.create_relationship(
            "Content", post.id, "AUTHORED_BY", lead.id, {"role": "PRIMARY", "byline": "By Ada"}
        )
        result = await get_content_with_primary_author(store, post.id)
        assert result.author.id == lead.id
        assert result.author_props.byline == "By Ada"

        credits = await get_content_authors(store, post.id)
        assert [(c.author.name, c.role) for c in credits] == [
            ("Bob", "CONTRIBUTOR"),
            ("Ada", "PRIMARY"),
        ]

    @pytest.mark.asyncio
    async def test_no_primary_author(self, store: InMemoryStore, post) -> None:
        """No PRIMARY edge, no author."""
        result = await get_content_with_primary_author(store, post.id)
        assert result.author is None
        assert result.author_props is None

    @pytest.mark.asyncio
    async def test_media(self, store: InMemoryStore, post) -> None:
        """Media sorted by position with unpositioned last; role filter applies."""
        def media(name: str):
            return store.seed("Media", filename=name, url=f"/{name}", mimeType="image/png", size=1)

        hero, g1, g2, loose = media("hero"), media("g1"), media("g2"), media("loose")
        await store.create_relationship("Content", post.id, "HAS_MEDIA", loose.id, {"role": "GALLERY"})
        await store.create_relationship("Content", post.id, "HAS_MEDIA", g2.id, {"role": "GALLERY", "position": 2})
        await store.create_relationship("Content", post.id, "HAS_MEDIA", hero.id, {"role": "FEATURED"})
        await store.create_relationship("Content", post.id, "HAS_MEDIA", g1.id, {"role": "GALLERY", "position": 1})

        gallery = await get_content_media(store, post.id, role="GALLERY")
        assert [m.media.filename for m in gallery] == ["g1", "g2", "loose"]
        assert len(await get_content_media(store, post.id)) == 4

        featured = await get_content_with_featured_image(store, post.id)
        assert featured.featured_image.id == hero.id

    @pytest.mark.asyncio
    async def test_categories(self, store: InMemoryStore, post) -> None:
        """Category assignments carry edge properties."""
        cat = store.seed("Category", name="News", slug="news")
        await store.create_relationship("Content", post.id, "CATEGORIZED_AS", cat.id, {"featured": True})
        (assignment,) = await get_content_categories(store, post.id)
        assert assignment.category.slug == "news"
        assert assignment.featured is True

    @pytest.mark.asyncio
    async def test_with_relations(self, store: InMemoryStore, post) -> None:
        """Every outgoing relationship is loaded."""
        cat = store.seed("Category", name="News", slug="news")
        await store.create_relationship("Content", post.id, "CATEGORIZED_AS", cat.id, {})
        result = await get_content_with_relations(store, post.id)
        assert result.content.id == post.id
        assert [c.slug for c in result.targets("CATEGORIZED_AS")] == ["news"]
        assert result.targets("HAS_BLOCK") == []
        assert set(result.relationships) >= {"AUTHORED_BY", "HAS_MEDIA", "HAS_STATE"}

    @pytest.mark.asyncio
    async def test_with_relations_missing(self, store: InMemoryStore) -> None:
        """Missing content gives None."""
        assert await get_content_with_relations(store, "nope") is None

    @pytest.mark.asyncio
    async def test_with_relations_other_errors(self, store: InMemoryStore) -> None:
        """Failures other than 404 propagate."""
        store.fail("get", "Content", StoreError("down", 500))
        with pytest.raises(StoreError):
            await get_content_with_relations(store, "any")


class TestPublished:
    """Workflow-based listings."""

    @pytest.mark.asyncio
    async def test_published_dedupes_by_slug(self, store: InMemoryStore, workflow_states: dict) -> None:
        """Duplicate slugs collapse to the newest; results are newest first."""
        old = seed_content(store, "dup", title="Old")
        other = seed_content(store, "other")
        new = seed_content(store, "dup", title="New")
        draft = seed_content(store, "draft-only")
        for c in (old, other, new):
            await put_in_state(store, c, workflow_states["published"])
        await put_in_state(store, draft, workflow_states["draft"])

        published = await get_published_content(store)
        assert [(c.slug, c.title) for c in published] == [("dup", "New"), ("other", "Other")]
        assert [c.slug for c in await get_published_content(store, limit=1, offset=1)] == ["other"]
        assert [c.slug for c in await get_draft_content(store)] == ["draft-only"]

    @pytest.mark.asyncio
    async def test_published_by_slug_and_type(
        self, store: InMemoryStore, workflow_states: dict, post
    ) -> None:
        """Only published items of the right type are returned."""
        assert await get_published_content_by_slug_and_type(store, "post", "POST") is None
        await put_in_state(store, post, workflow_states["published"])
        result = await get_published_content_by_slug_and_type(store, "post", "POST")
        assert result.content.id == post.id
        assert await get_published_content_by_slug_and_type(store, "post", "PAGE") is None
