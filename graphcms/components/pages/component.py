"""
Pages component - Site pages, hierarchy and sections.

Pages form a tree through PAGE_PARENT edges pointing from child to parent.
A page owns ordered sections (PAGE_HAS_SECTION), may use a layout
(PAGE_USES_LAYOUT), filter content by categories (PAGE_FILTERS_CATEGORY)
and hold global blocks in layout regions (PAGE_HAS_PLACEMENT).
"""

from __future__ import annotations

import asyncio
import logging
import math

from graphcms.components.layouts.component import (
    group_placements_by_region,
    load_placement_contents,
    sort_placements,
)
from graphcms.components.layouts.models import PlacementWithContent
from graphcms.components.workflow.component import get_content_by_state
from graphcms.core.errors import StoreError
from graphcms.core.ports.store import ListOptions, StorePort
from graphcms.domain.entities import (
    Block,
    Category,
    Content,
    ContentType,
    GlobalBlockConfig,
    Layout,
    Page,
    PageSection,
    parse_section_config,
)
from graphcms.domain.query import Query, eq, where_slug
from graphcms.settings.models import WorkflowSettings

from .models import (
    PageSectionWithContent,
    PageTreeNode,
    PageWithRelations,
    SectionContentItem,
)

logger = logging.getLogger(__name__)

PAGE_RELATIONS: dict[str, str] = {
    "PAGE_PARENT": "Page",
    "PAGE_USES_LAYOUT": "Layout",
    "PAGE_HAS_SECTION": "PageSection",
    "PAGE_FILTERS_CATEGORY": "Category",
}


# --- Lookups ---


async def get_page_by_path(store: StorePort, path: str) -> Page | None:
    pages = await store.query("Page", Query(where=eq("path", path), limit=1))
    return pages[0] if pages else None


async def get_page_by_slug(store: StorePort, slug: str) -> Page | None:
    pages = await store.query("Page", Query(where=where_slug(slug), limit=1))
    return pages[0] if pages else None


async def get_published_pages(
    store: StorePort, limit: int | None = None, offset: int | None = None
) -> list[Page]:
    return await store.query(
        "Page",
        Query(
            where=eq("isPublished", True),
            order_by="navOrder",
            order_direction="ASC",
            limit=limit,
            offset=offset,
        ),
    )


async def get_all_pages(
    store: StorePort, limit: int | None = None, offset: int | None = None
) -> list[Page]:
    return await store.list(
        "Page", ListOptions(limit=limit, offset=offset, order_by="path", order_direction="ASC")
    )


# --- Hierarchy ---


async def get_page_parent(store: StorePort, page_id: str) -> Page | None:
    rels = await store.get_relationships("Page", page_id, "PAGE_PARENT", "out", "Page")
    return rels[0].target if rels else None


async def get_page_children(store: StorePort, page_id: str) -> list[Page]:
    """Child pages by navOrder; pages without one sort as 0."""
    rels = await store.get_relationships("Page", page_id, "PAGE_PARENT", "in", "Page")
    return sorted((r.target for r in rels), key=lambda p: p.nav_order or 0)


async def _nav_ordered_pages(store: StorePort) -> list[Page]:
    return await store.list("Page", ListOptions(order_by="navOrder", order_direction="ASC"))


async def get_root_pages(store: StorePort) -> list[Page]:
    pages = await _nav_ordered_pages(store)
    parents = await asyncio.gather(*(get_page_parent(store, p.id) for p in pages))
    return [page for page, parent in zip(pages, parents) if parent is None]


async def get_page_ancestors(store: StorePort, page_id: str) -> list[Page]:
    """
    Breadcrumb trail for a page, root first, excluding the page itself.

    Stops at the first page already seen, so a parent cycle terminates.
    """
    ancestors: list[Page] = []
    visited = {page_id}
    current = page_id
    while True:
        parent = await get_page_parent(store, current)
        if parent is None:
            break
        if parent.id in visited:
            logger.warning("Page parent cycle detected at page %s", parent.id)
            break
        visited.add(parent.id)
        ancestors.insert(0, parent)
        current = parent.id
    return ancestors


async def get_navigation_tree(
    store: StorePort, published_only: bool = True
) -> list[PageTreeNode]:
    """
    Page forest in navOrder.

    With published_only, pages that are unpublished or hidden from navigation
    are left out; their children are promoted to roots. A page whose parent
    link would close a cycle becomes a root.
    """
    pages = await _nav_ordered_pages(store)
    if published_only:
        pages = [p for p in pages if p.is_published and p.show_in_nav]

    parents = await asyncio.gather(*(get_page_parent(store, p.id) for p in pages))
    nodes = {p.id: PageTreeNode(page=p) for p in pages}
    attached: dict[str, str] = {}
    roots: list[PageTreeNode] = []
    for page, parent in zip(pages, parents):
        node = nodes[page.id]
        if parent is None or parent.id not in nodes:
            roots.append(node)
        elif _reaches(attached, parent.id, page.id):
            logger.warning("Page parent cycle detected at page %s", page.id)
            roots.append(node)
        else:
            attached[page.id] = parent.id
            nodes[parent.id].children.append(node)
    return roots


def _reaches(parent_of: dict[str, str], start: str, target: str) -> bool:
    current: str | None = start
    while current is not None:
        if current == target:
            return True
        current = parent_of.get(current)
    return False


def build_page_path(slug: str, parent_path: str | None = None) -> str:
    if not parent_path or parent_path == "/":
        return f"/{slug}"
    return f"{parent_path}/{slug}"


async def set_page_parent(store: StorePort, page_id: str, parent_id: str | None) -> None:
    existing = await get_page_parent(store, page_id)
    if existing is not None:
        await store.delete_relationship("Page", page_id, "PAGE_PARENT", existing.id)
    if parent_id:
        await store.create_relationship("Page", page_id, "PAGE_PARENT", parent_id, {})


# --- Sections ---


async def get_page_sections(store: StorePort, page_id: str) -> list[PageSection]:
    rels = await store.get_relationships(
        "Page", page_id, "PAGE_HAS_SECTION", "out", "PageSection"
    )
    return sorted((r.target for r in rels), key=lambda s: s.position)


async def get_section_content(store: StorePort, section_id: str) -> list[SectionContentItem]:
    """Section content by edge position; unpositioned items last."""
    rels = await store.get_relationships(
        "PageSection", section_id, "SECTION_HAS_CONTENT", "out", "Content"
    )
    items = [
        SectionContentItem(content=r.target, position=r.relationship.properties.position)
        for r in rels
    ]
    return sorted(items, key=lambda i: math.inf if i.position is None else i.position)


async def get_page_sections_with_content(
    store: StorePort, page_id: str
) -> list[PageSectionWithContent]:
    sections = await get_page_sections(store, page_id)
    contents = await asyncio.gather(*(get_section_content(store, s.id) for s in sections))
    return [
        PageSectionWithContent(section=s, contents=c) for s, c in zip(sections, contents)
    ]


async def _section_block(store: StorePort, section: PageSection) -> Block | None:
    """
    Global block of a GLOBAL_BLOCK section.

    The SECTION_HAS_BLOCK edge wins; otherwise config.blockId is fetched. A
    configured block that no longer exists gives None.
    """
    rels = await store.get_relationships(
        "PageSection", section.id, "SECTION_HAS_BLOCK", "out", "Block"
    )
    if rels:
        return rels[0].target

    config = parse_section_config(section)
    assert isinstance(config, GlobalBlockConfig)
    if not config.block_id:
        return None
    try:
        return await store.get("Block", config.block_id)
    except StoreError as e:
        if not e.is_not_found:
            raise
        logger.warning(
            "Section %s references missing block %s", section.id, config.block_id
        )
        return None


async def get_page_sections_with_blocks(
    store: StorePort, page_id: str
) -> list[PageSectionWithContent]:
    """Sections with their content and, for GLOBAL_BLOCK sections, the block."""
    result: list[PageSectionWithContent] = []
    for section in await get_page_sections(store, page_id):
        contents = await get_section_content(store, section.id)
        block = None
        if section.section_type == "GLOBAL_BLOCK":
            block = await _section_block(store, section)
        result.append(PageSectionWithContent(section=section, contents=contents, block=block))
    return result


# --- Layout and category filters ---


async def get_page_layout(store: StorePort, page_id: str) -> Layout | None:
    rels = await store.get_relationships("Page", page_id, "PAGE_USES_LAYOUT", "out", "Layout")
    return rels[0].target if rels else None


async def set_page_layout(store: StorePort, page_id: str, layout_id: str) -> None:
    rels = await store.get_relationships("Page", page_id, "PAGE_USES_LAYOUT", "out", "Layout")
    for rel in rels:
        await store.delete_relationship("Page", page_id, "PAGE_USES_LAYOUT", rel.target.id)
    await store.create_relationship("Page", page_id, "PAGE_USES_LAYOUT", layout_id, {})


async def get_page_filter_categories(store: StorePort, page_id: str) -> list[Category]:
    rels = await store.get_relationships(
        "Page", page_id, "PAGE_FILTERS_CATEGORY", "out", "Category"
    )
    return [r.target for r in rels]


async def set_page_filter_categories(
    store: StorePort, page_id: str, category_ids: list[str]
) -> None:
    """Replace the page's category filters with `category_ids`."""
    for category in await get_page_filter_categories(store, page_id):
        await store.delete_relationship("Page", page_id, "PAGE_FILTERS_CATEGORY", category.id)
    for category_id in category_ids:
        await store.create_relationship("Page", page_id, "PAGE_FILTERS_CATEGORY", category_id, {})


async def get_page_with_relations(store: StorePort, page_id: str) -> PageWithRelations | None:
    try:
        page = await store.get("Page", page_id)
    except StoreError as e:
        if e.is_not_found:
            return None
        raise

    names = list(PAGE_RELATIONS)
    results = await asyncio.gather(
        *(store.get_relationships("Page", page_id, name, "out", PAGE_RELATIONS[name]) for name in names)
    )
    return PageWithRelations(page=page, relationships=dict(zip(names, results)))


async def get_filtered_content_for_page(
    store: StorePort,
    page_id: str,
    limit: int = 10,
    offset: int = 0,
    content_type: ContentType | None = None,
    settings: WorkflowSettings | None = None,
) -> list[Content]:
    """
    Published content matching any of the page's filter categories.

    A page without filters shows all published content. Results are sorted
    by publishedAt, newest first; unpublished dates sort last.
    """
    settings = settings or WorkflowSettings()
    categories = await get_page_filter_categories(store, page_id)
    published = await get_content_by_state(store, settings.published_slug, limit=None)

    if categories:
        rels_per_category = await asyncio.gather(
            *(
                store.get_relationships("Category", c.id, "CATEGORIZED_AS", "in", "Content")
                for c in categories
            )
        )
        in_categories = {r.target.id for rels in rels_per_category for r in rels}
        published = [c for c in published if c.id in in_categories]

    if content_type:
        published = [c for c in published if c.content_type == content_type]

    def published_key(content: Content) -> float:
        return content.published_at.timestamp() if content.published_at else 0.0

    ordered = sorted(published, key=published_key, reverse=True)
    return ordered[offset : offset + limit]


# --- Placements ---


async def get_page_placements(store: StorePort, page_id: str) -> list[PlacementWithContent]:
    rels = await store.get_relationships(
        "Page", page_id, "PAGE_HAS_PLACEMENT", "out", "LayoutPlacement"
    )
    placements = await asyncio.gather(*(load_placement_contents(store, r.target) for r in rels))
    return sort_placements(placements)


group_page_placements_by_region = group_placements_by_region


async def get_page_region_blocks(store: StorePort, page_id: str, region: str) -> list[Block]:
    """Global blocks placed in one region of a page, in position order."""
    return [
        p.block
        for p in await get_page_placements(store, page_id)
        if p.placement.region == region and p.block is not None
    ]
