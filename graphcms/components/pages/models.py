"""
Pages component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphcms.domain.entities import Block, Content, Page, PageSection
from graphcms.domain.relationships import RelationshipResult


@dataclass
class PageTreeNode:
    page: Page
    children: list[PageTreeNode] = field(default_factory=list)


@dataclass(frozen=True)
class SectionContentItem:
    content: Content
    position: float | None = None


@dataclass(frozen=True)
class PageSectionWithContent:
    """A section, its ordered content and, for GLOBAL_BLOCK sections, its block."""

    section: PageSection
    contents: list[SectionContentItem]
    block: Block | None = None


@dataclass(frozen=True)
class PageWithRelations:
    page: Page
    relationships: dict[str, list[RelationshipResult]]

    def targets(self, relationship: str) -> list:
        return [r.target for r in self.relationships.get(relationship, [])]
