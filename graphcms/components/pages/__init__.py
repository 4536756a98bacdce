"""
Pages component - Site pages, hierarchy and sections.
"""

from .component import (
    PAGE_RELATIONS,
    build_page_path,
    get_all_pages,
    get_filtered_content_for_page,
    get_navigation_tree,
    get_page_ancestors,
    get_page_by_path,
    get_page_by_slug,
    get_page_children,
    get_page_filter_categories,
    get_page_layout,
    get_page_parent,
    get_page_placements,
    get_page_region_blocks,
    get_page_sections,
    get_page_sections_with_blocks,
    get_page_sections_with_content,
    get_page_with_relations,
    get_published_pages,
    get_root_pages,
    get_section_content,
    group_page_placements_by_region,
    set_page_filter_categories,
    set_page_layout,
    set_page_parent,
)
from .models import (
    PageSectionWithContent,
    PageTreeNode,
    PageWithRelations,
    SectionContentItem,
)

__all__ = [
    # Lookups
    "get_page_by_path",
    "get_page_by_slug",
    "get_published_pages",
    "get_all_pages",
    # Hierarchy
    "get_page_parent",
    "get_page_children",
    "get_root_pages",
    "get_page_ancestors",
    "get_navigation_tree",
    "build_page_path",
    "set_page_parent",
    # Sections
    "get_page_sections",
    "get_section_content",
    "get_page_sections_with_content",
    "get_page_sections_with_blocks",
    # Layout, filters and placements
    "get_page_layout",
    "set_page_layout",
    "get_page_filter_categories",
    "set_page_filter_categories",
    "get_page_with_relations",
    "get_filtered_content_for_page",
    "get_page_placements",
    "group_page_placements_by_region",
    "get_page_region_blocks",
    "PAGE_RELATIONS",
    # Models
    "PageTreeNode",
    "SectionContentItem",
    "PageSectionWithContent",
    "PageWithRelations",
]
