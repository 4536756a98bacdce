"""
Category hierarchy tests against the in-memory store.
"""

from __future__ import annotations

import pytest

from graphcms.components.categories import (
    get_all_categories_with_parent,
    get_category_children,
    get_category_parent,
    get_category_tree,
    get_root_categories,
    set_category_parent,
)
from graphcms.core.errors import StoreError
from tests.fakes import InMemoryStore


@pytest.fixture
def tree(store: InMemoryStore) -> dict:
    """news -> {local, world}; sport has no parent."""
    cats = {
        slug: store.seed("Category", name=slug.title(), slug=slug)
        for slug in ("news", "local", "world", "sport")
    }
    return cats


async def link(store: InMemoryStore, child, parent) -> None:
    await store.create_relationship("Category", child.id, "CATEGORY_PARENT", parent.id)


class TestHierarchy:
    """Parent and children lookups."""

    @pytest.mark.asyncio
    async def test_parent_and_children(self, store: InMemoryStore, tree: dict) -> None:
        """Children point at their parent."""
        await link(store, tree["local"], tree["news"])
        await link(store, tree["world"], tree["news"])
        assert (await get_category_parent(store, tree["local"].id)).slug == "news"
        assert await get_category_parent(store, tree["news"].id) is None
        children = await get_category_children(store, tree["news"].id)
        assert [c.slug for c in children] == ["local", "world"]

    @pytest.mark.asyncio
    async def test_parent_lookup_failure_is_none(self, store: InMemoryStore, tree: dict) -> None:
        """A failing parent lookup is treated as no parent."""
        store.fail("get_relationships", "CATEGORY_PARENT", StoreError("down", 500))
        assert await get_category_parent(store, tree["local"].id) is None

    @pytest.mark.asyncio
    async def test_roots(self, store: InMemoryStore, tree: dict) -> None:
        """Roots are categories without a parent."""
        await link(store, tree["local"], tree["news"])
        roots = await get_root_categories(store)
        assert sorted(c.slug for c in roots) == ["news", "sport", "world"]

    @pytest.mark.asyncio
    async def test_set_parent(self, store: InMemoryStore, tree: dict) -> None:
        """Setting a parent replaces the old one; None detaches."""
        await set_category_parent(store, tree["local"].id, tree["news"].id)
        await set_category_parent(store, tree["local"].id, tree["sport"].id)
        assert (await get_category_parent(store, tree["local"].id)).slug == "sport"
        assert len(store.edges_of("CATEGORY_PARENT")) == 1

        await set_category_parent(store, tree["local"].id, None)
        assert await get_category_parent(store, tree["local"].id) is None
        assert store.edges_of("CATEGORY_PARENT") == []


class TestTree:
    """Tree building."""

    @pytest.mark.asyncio
    async def test_tree(self, store: InMemoryStore, tree: dict) -> None:
        """Children nest under their parent."""
        await link(store, tree["local"], tree["news"])
        await link(store, tree["world"], tree["news"])
        roots = await get_category_tree(store)
        shape = {n.category.slug: [c.category.slug for c in n.children] for n in roots}
        assert shape == {"news": ["local", "world"], "sport": []}

    @pytest.mark.asyncio
    async def test_with_parent_ids(self, store: InMemoryStore, tree: dict) -> None:
        """Each category is listed with its parent id."""
        await link(store, tree["local"], tree["news"])
        rows = {r.category.slug: r.parent_id for r in await get_all_categories_with_parent(store)}
        assert rows["local"] == tree["news"].id
        assert rows["news"] is None
