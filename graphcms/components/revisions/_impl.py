"""
Revisions component - Snapshot building and diffing.

Functional core: no store access.

A snapshot maps str(position) to {blockType, content, metadata}.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from graphcms.domain.entities import ContentBlock

from .models import RevisionDiff


class SnapshotLike(Protocol):
    title: str
    blocks_snapshot: Mapping[str, Any] | None


def build_blocks_snapshot(blocks: Iterable[ContentBlock]) -> dict[str, Any]:
    return {
        str(b.position): {
            "blockType": b.block_type,
            "content": b.content,
            "metadata": b.metadata,
        }
        for b in blocks
    }


def _serialized_contents(snapshot: Mapping[str, Any] | None) -> dict[str, str]:
    out = {}
    for pos, block in (snapshot or {}).items():
        content = block.get("content") if isinstance(block, Mapping) else None
        out[pos] = json.dumps(content, sort_keys=True, default=str)
    return out


def compare_revisions(a: SnapshotLike, b: SnapshotLike) -> RevisionDiff:
    """
    Diff two revisions, `a` being the older.

    Positions only in `b` are added, only in `a` removed, and in both with
    different content modified. A missing snapshot counts as empty.
    """
    before = _serialized_contents(a.blocks_snapshot)
    after = _serialized_contents(b.blocks_snapshot)

    added = tuple(sorted((p for p in after if p not in before), key=_position_key))
    removed = tuple(sorted((p for p in before if p not in after), key=_position_key))
    modified = tuple(
        sorted((p for p in after if p in before and before[p] != after[p]), key=_position_key)
    )
    return RevisionDiff(
        title_changed=a.title != b.title,
        added=added,
        removed=removed,
        modified=modified,
    )


def _position_key(pos: str) -> tuple[int, int | str]:
    # Numeric positions first, in numeric order
    return (0, int(pos)) if pos.lstrip("-").isdigit() else (1, pos)
