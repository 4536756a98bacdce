"""
Layouts component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphcms.domain.entities import Block, ContentBlock, LayoutPlacement


@dataclass(frozen=True)
class PlacementWithContent:
    """A placement and whatever it holds: a global block, a content block, or both."""

    placement: LayoutPlacement
    block: Block | None = None
    content_block: ContentBlock | None = None
