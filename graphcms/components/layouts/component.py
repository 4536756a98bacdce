"""
Layouts component - Layouts, region placements and global blocks.

A Layout declares named regions. A LayoutPlacement binds a region and a
position to a global Block or a ContentBlock; placements hang off Content
(HAS_PLACEMENT) or Page (PAGE_HAS_PLACEMENT).
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from graphcms.core.ports.store import StorePort
from graphcms.domain.entities import (
    Block,
    GlobalBlockType,
    Layout,
    LayoutPlacement,
    LayoutRegionConfig,
)
from graphcms.domain.query import Query, and_, eq, where_slug

from .models import PlacementWithContent


async def get_all_layouts(store: StorePort) -> list[Layout]:
    return await store.list("Layout")


async def get_layout_by_slug(store: StorePort, slug: str) -> Layout | None:
    layouts = await store.query("Layout", Query(where=where_slug(slug), limit=1))
    return layouts[0] if layouts else None


def layout_regions(layout: Layout) -> dict[str, LayoutRegionConfig]:
    """Parse a layout's region map into typed region configs."""
    return {
        region_id: LayoutRegionConfig.model_validate(config)
        for region_id, config in (layout.regions or {}).items()
    }


async def get_content_layout(store: StorePort, content_id: str) -> Layout | None:
    rels = await store.get_relationships("Content", content_id, "USES_LAYOUT", "out", "Layout")
    return rels[0].target if rels else None


async def set_content_layout(store: StorePort, content_id: str, layout_id: str) -> None:
    """Point content at a single layout, replacing any previous one."""
    rels = await store.get_relationships("Content", content_id, "USES_LAYOUT", "out", "Layout")
    for rel in rels:
        await store.delete_relationship("Content", content_id, "USES_LAYOUT", rel.target.id)
    await store.create_relationship("Content", content_id, "USES_LAYOUT", layout_id, {})


# --- Placements ---


async def load_placement_contents(
    store: StorePort, placement: LayoutPlacement
) -> PlacementWithContent:
    """Fetch the global block and content block held by a placement."""
    block_rels, content_block_rels = await asyncio.gather(
        store.get_relationships(
            "LayoutPlacement", placement.id, "PLACEMENT_CONTAINS_BLOCK", "out", "Block"
        ),
        store.get_relationships(
            "LayoutPlacement",
            placement.id,
            "PLACEMENT_CONTAINS_CONTENT_BLOCK",
            "out",
            "ContentBlock",
        ),
    )
    return PlacementWithContent(
        placement=placement,
        block=block_rels[0].target if block_rels else None,
        content_block=content_block_rels[0].target if content_block_rels else None,
    )


def sort_placements(placements: Iterable[PlacementWithContent]) -> list[PlacementWithContent]:
    """Order by region name, then position."""
    return sorted(placements, key=lambda p: (p.placement.region, p.placement.position))


async def get_content_placements(
    store: StorePort, content_id: str
) -> list[PlacementWithContent]:
    rels = await store.get_relationships(
        "Content", content_id, "HAS_PLACEMENT", "out", "LayoutPlacement"
    )
    placements = await asyncio.gather(*(load_placement_contents(store, r.target) for r in rels))
    return sort_placements(placements)


def group_placements_by_region(
    placements: Iterable[PlacementWithContent],
) -> dict[str, list[PlacementWithContent]]:
    """Group placements by region, keeping input order within each region."""
    groups: dict[str, list[PlacementWithContent]] = {}
    for item in placements:
        groups.setdefault(item.placement.region, []).append(item)
    return groups


async def create_placement(
    store: StorePort,
    content_id: str,
    region: str,
    position: int,
    block_id: str | None = None,
    content_block_id: str | None = None,
) -> LayoutPlacement:
    placement = await store.create(
        "LayoutPlacement", {"region": region, "position": position, "settings": {}}
    )
    await store.create_relationship(
        "Content",
        content_id,
        "HAS_PLACEMENT",
        placement.id,
        {"region": region, "position": position},
    )
    if block_id:
        await store.create_relationship(
            "LayoutPlacement", placement.id, "PLACEMENT_CONTAINS_BLOCK", block_id, {}
        )
    if content_block_id:
        await store.create_relationship(
            "LayoutPlacement",
            placement.id,
            "PLACEMENT_CONTAINS_CONTENT_BLOCK",
            content_block_id,
            {},
        )
    return placement


async def delete_placement(store: StorePort, content_id: str, placement_id: str) -> None:
    await store.delete_relationship("Content", content_id, "HAS_PLACEMENT", placement_id)
    await store.delete("LayoutPlacement", placement_id)


async def update_placement_position(
    store: StorePort, placement_id: str, position: int
) -> LayoutPlacement:
    return await store.patch("LayoutPlacement", placement_id, {"position": position})


# --- Global blocks ---


async def get_global_blocks(store: StorePort) -> list[Block]:
    return await store.query("Block", Query(where=eq("isGlobal", True)))


async def get_global_blocks_by_type(store: StorePort, block_type: GlobalBlockType) -> list[Block]:
    return await store.query(
        "Block", Query(where=and_(eq("isGlobal", True), eq("blockType", block_type)))
    )
