"""
Blocks component - Data models.

Documents are ProseMirror-style trees (as produced by Tiptap editors):
    {"type": "doc", "content": [{"type": "paragraph", "content": [...]}, ...]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from graphcms.domain.entities import ContentBlock

# --- Document tree ---


@dataclass
class DocNode:
    """A node in the rich text document tree."""

    type: str
    attrs: dict[str, Any] = field(default_factory=dict)
    content: list[DocNode] = field(default_factory=list)
    text: str | None = None
    marks: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"type": self.type}
        if self.attrs:
            result["attrs"] = self.attrs
        if self.content:
            result["content"] = [node.to_dict() for node in self.content]
        if self.text is not None:
            result["text"] = self.text
        if self.marks:
            result["marks"] = self.marks
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocNode:
        """Create from dictionary."""
        return cls(
            type=data.get("type", ""),
            attrs=dict(data.get("attrs") or {}),
            content=[cls.from_dict(child) for child in data.get("content") or []],
            text=data.get("text"),
            marks=list(data.get("marks") or []),
        )


@dataclass
class Document:
    """Root of a document: an ordered list of top-level nodes."""

    content: list[DocNode] = field(default_factory=list)
    type: str = "doc"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": [node.to_dict() for node in self.content]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        return cls(content=[DocNode.from_dict(n) for n in data.get("content") or []])


# --- Validation Errors ---


@dataclass(frozen=True)
class BlocksValidationError:
    """Block persistence error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SaveBlocksInput:
    """Input for replacing a content item's blocks."""

    content_id: str
    document: Document


# --- Output Models ---


@dataclass(frozen=True)
class SaveBlocksOutput:
    """Output from a block save."""

    blocks: list[ContentBlock]
    errors: list[BlocksValidationError]
    success: bool
