"""
Layouts component - Layouts, region placements and global blocks.
"""

from .component import (
    create_placement,
    delete_placement,
    get_all_layouts,
    get_content_layout,
    get_content_placements,
    get_global_blocks,
    get_global_blocks_by_type,
    get_layout_by_slug,
    group_placements_by_region,
    layout_regions,
    load_placement_contents,
    set_content_layout,
    sort_placements,
    update_placement_position,
)
from .models import PlacementWithContent

__all__ = [
    # Layouts
    "get_all_layouts",
    "get_layout_by_slug",
    "layout_regions",
    "get_content_layout",
    "set_content_layout",
    # Placements
    "get_content_placements",
    "load_placement_contents",
    "sort_placements",
    "group_placements_by_region",
    "create_placement",
    "delete_placement",
    "update_placement_position",
    # Global blocks
    "get_global_blocks",
    "get_global_blocks_by_type",
    # Models
    "PlacementWithContent",
]
