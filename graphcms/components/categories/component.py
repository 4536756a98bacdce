"""
Categories component - Category hierarchy.

A category points at its parent with a CATEGORY_PARENT edge; roots have
none.
"""

from __future__ import annotations

import asyncio
import logging

from graphcms.core.errors import StoreError
from graphcms.core.ports.store import StorePort
from graphcms.domain.entities import Category

from .models import CategoryTreeNode, CategoryWithParent

logger = logging.getLogger(__name__)


async def get_category_parent(store: StorePort, category_id: str) -> Category | None:
    """
    Parent category, or None.

    An edge pointing at a deleted category makes the lookup fail remotely;
    that is logged and treated as no parent.
    """
    try:
        rels = await store.get_relationships(
            "Category", category_id, "CATEGORY_PARENT", "out", "Category"
        )
    except StoreError as e:
        logger.warning("Failed to get parent for category %s: %s", category_id, e.message)
        return None
    return rels[0].target if rels else None


async def get_category_children(store: StorePort, category_id: str) -> list[Category]:
    rels = await store.get_relationships(
        "Category", category_id, "CATEGORY_PARENT", "in", "Category"
    )
    return [r.target for r in rels]


async def _parents(store: StorePort, categories: list[Category]) -> list[Category | None]:
    return await asyncio.gather(*(get_category_parent(store, c.id) for c in categories))


async def get_root_categories(store: StorePort) -> list[Category]:
    categories = await store.list("Category")
    parents = await _parents(store, categories)
    return [c for c, parent in zip(categories, parents) if parent is None]


async def set_category_parent(
    store: StorePort, category_id: str, parent_id: str | None
) -> None:
    """Replace the parent edge; None makes the category a root."""
    existing = await get_category_parent(store, category_id)
    if existing is not None:
        await store.delete_relationship("Category", category_id, "CATEGORY_PARENT", existing.id)
    if parent_id:
        await store.create_relationship("Category", category_id, "CATEGORY_PARENT", parent_id, {})


async def get_category_tree(store: StorePort) -> list[CategoryTreeNode]:
    """
    Build the category forest.

    A category whose parent is not in the listing becomes a root.
    """
    categories = await store.list("Category")
    parents = await _parents(store, categories)

    nodes = {c.id: CategoryTreeNode(category=c) for c in categories}
    roots: list[CategoryTreeNode] = []
    for category, parent in zip(categories, parents):
        node = nodes[category.id]
        if parent is not None and parent.id in nodes:
            nodes[parent.id].children.append(node)
        else:
            roots.append(node)
    return roots


async def get_all_categories_with_parent(store: StorePort) -> list[CategoryWithParent]:
    categories = await store.list("Category")
    parents = await _parents(store, categories)
    return [
        CategoryWithParent(category=c, parent_id=parent.id if parent else None)
        for c, parent in zip(categories, parents)
    ]
