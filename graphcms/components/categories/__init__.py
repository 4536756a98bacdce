"""
Categories component - Category hierarchy.
"""

from .component import (
    get_all_categories_with_parent,
    get_category_children,
    get_category_parent,
    get_category_tree,
    get_root_categories,
    set_category_parent,
)
from .models import CategoryTreeNode, CategoryWithParent

__all__ = [
    "get_category_parent",
    "get_category_children",
    "get_root_categories",
    "set_category_parent",
    "get_category_tree",
    "get_all_categories_with_parent",
    "CategoryTreeNode",
    "CategoryWithParent",
]
