"""
Categories component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphcms.domain.entities import Category


@dataclass
class CategoryTreeNode:
    category: Category
    children: list[CategoryTreeNode] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryWithParent:
    category: Category
    parent_id: str | None
