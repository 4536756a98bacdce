"""
Document to block conversion and back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from graphcms.components.blocks import (
    DocNode,
    Document,
    blocks_to_document,
    document_to_blocks,
    extract_text,
)
from graphcms.core.errors import SchemaValidationError
from graphcms.domain.blocks import validate_block_content


def text(value: str) -> dict[str, Any]:
    return {"type": "text", "text": value}


def paragraph(value: str) -> dict[str, Any]:
    return {"type": "paragraph", "content": [text(value)]}


def doc(*nodes: dict[str, Any]) -> Document:
    return Document.from_dict({"type": "doc", "content": list(nodes)})


@dataclass
class FakeBlock:
    block_type: str
    content: dict[str, Any]
    position: int
    metadata: dict[str, Any] = field(default_factory=dict)


class TestDocumentToBlocks:
    """document_to_blocks."""

    def test_paragraph(self) -> None:
        """Paragraph text is concatenated across text runs."""
        blocks = document_to_blocks(
            doc({"type": "paragraph", "content": [text("Hello, "), text("world")]})
        )
        assert len(blocks) == 1
        assert blocks[0].block_type == "PARAGRAPH"
        assert blocks[0].content == {"text": "Hello, world", "format": "plain"}
        assert blocks[0].position == 0

    def test_heading_level(self) -> None:
        """Heading level is kept when valid."""
        blocks = document_to_blocks(
            doc({"type": "heading", "attrs": {"level": 3}, "content": [text("Title")]})
        )
        assert blocks[0].content == {"text": "Title", "level": 3}

    @pytest.mark.parametrize("level", [None, 0, 7, "2"])
    def test_heading_bad_level_defaults(self, level: Any) -> None:
        """Missing or out of range levels become 2."""
        blocks = document_to_blocks(
            doc({"type": "heading", "attrs": {"level": level}, "content": [text("T")]})
        )
        assert blocks[0].content["level"] == 2

    def test_image_alt_doubles_as_caption(self) -> None:
        """Image alt text is also used as the caption."""
        blocks = document_to_blocks(
            doc({"type": "image", "attrs": {"src": "/a.png", "alt": "A cat"}})
        )
        assert blocks[0].content == {"src": "/a.png", "alt": "A cat", "caption": "A cat"}

    def test_blockquote(self) -> None:
        """Plain blockquotes become QUOTE blocks."""
        blocks = document_to_blocks(doc({"type": "blockquote", "content": [paragraph("Wise")]}))
        assert blocks[0].block_type == "QUOTE"
        assert blocks[0].content == {"text": "Wise", "attribution": None}

    def test_callout(self) -> None:
        """Blockquotes flagged as callouts become CALLOUT blocks."""
        blocks = document_to_blocks(
            doc(
                {
                    "type": "blockquote",
                    "attrs": {
                        "data-callout": True,
                        "data-callout-variant": "warning",
                        "data-callout-title": "Careful",
                    },
                    "content": [paragraph("Hot")],
                }
            )
        )
        assert blocks[0].block_type == "CALLOUT"
        assert blocks[0].content == {"text": "Hot", "variant": "warning", "title": "Careful"}

    def test_callout_unknown_variant(self) -> None:
        """Unknown callout variants fall back to info."""
        blocks = document_to_blocks(
            doc(
                {
                    "type": "blockquote",
                    "attrs": {"data-callout": True, "data-callout-variant": "shout"},
                    "content": [paragraph("x")],
                }
            )
        )
        assert blocks[0].content["variant"] == "info"

    def test_code_block(self) -> None:
        """Code blocks keep their language."""
        blocks = document_to_blocks(
            doc({"type": "codeBlock", "attrs": {"language": "python"}, "content": [text("x = 1")]})
        )
        assert blocks[0].content == {"code": "x = 1", "language": "python", "filename": None}

    def test_lists(self) -> None:
        """Bullet and ordered lists flatten each item to text."""
        item = lambda v: {"type": "listItem", "content": [paragraph(v)]}  # noqa: E731
        blocks = document_to_blocks(
            doc(
                {"type": "bulletList", "content": [item("a"), item("b")]},
                {"type": "orderedList", "content": [item("one")]},
            )
        )
        assert blocks[0].content == {"items": ["a", "b"], "ordered": False}
        assert blocks[1].content == {"items": ["one"], "ordered": True}

    def test_divider_and_embed(self) -> None:
        """Horizontal rules and embeds map to DIVIDER and EMBED."""
        blocks = document_to_blocks(
            doc(
                {"type": "horizontalRule"},
                {"type": "embed", "attrs": {"displayStyle": "huge", "contentId": "c1"}},
            )
        )
        assert blocks[0].content == {"style": "line"}
        assert blocks[1].content == {"displayStyle": "card", "contentId": "c1", "url": None}

    def test_unmapped_nodes_dropped_without_gaps(self) -> None:
        """Unknown nodes vanish and positions stay dense."""
        blocks = document_to_blocks(
            doc(paragraph("a"), {"type": "table"}, paragraph("b"), {"type": "mystery"})
        )
        assert [b.position for b in blocks] == [0, 1]
        assert [b.content["text"] for b in blocks] == ["a", "b"]

    def test_empty_document(self) -> None:
        """An empty document has no blocks."""
        assert document_to_blocks(Document()) == []

    def test_extract_text_nested(self) -> None:
        """Text is gathered from every depth."""
        node = DocNode.from_dict({"type": "blockquote", "content": [paragraph("a"), paragraph("b")]})
        assert extract_text(node) == "ab"


class TestBlocksToDocument:
    """blocks_to_document."""

    def test_sorted_by_position(self) -> None:
        """Input order is ignored."""
        document = blocks_to_document(
            [
                FakeBlock("PARAGRAPH", {"text": "second"}, 1),
                FakeBlock("PARAGRAPH", {"text": "first"}, 0),
            ]
        )
        assert [extract_text(n) for n in document.content] == ["first", "second"]

    def test_unknown_block_type_skipped(self) -> None:
        """Blocks without a node form are left out."""
        document = blocks_to_document([FakeBlock("CAROUSEL", {}, 0)])
        assert document.content == []

    def test_callout_restores_attrs(self) -> None:
        """Callouts come back as flagged blockquotes."""
        document = blocks_to_document(
            [FakeBlock("CALLOUT", {"text": "Hi", "variant": "error", "title": "T"}, 0)]
        )
        node = document.content[0]
        assert node.type == "blockquote"
        assert node.attrs == {
            "data-callout": True,
            "data-callout-variant": "error",
            "data-callout-title": "T",
        }

    def test_text_survives_round_trip(self) -> None:
        """Text content survives document -> blocks -> document."""
        original = doc(
            {"type": "heading", "attrs": {"level": 1}, "content": [text("Title")]},
            paragraph("Body"),
            {"type": "codeBlock", "attrs": {"language": "sql"}, "content": [text("select 1")]},
        )
        restored = blocks_to_document(document_to_blocks(original))
        assert restored.to_dict() == original.to_dict()

    def test_every_mapped_type_round_trips(self) -> None:
        """Node types and their text survive for every mapped node."""
        original = doc(
            paragraph("Intro"),
            {"type": "heading", "attrs": {"level": 3}, "content": [text("Part")]},
            {"type": "image", "attrs": {"src": "/a.png", "alt": "A"}},
            {"type": "blockquote", "content": [paragraph("one "), paragraph("two")]},
            {
                "type": "blockquote",
                "attrs": {"data-callout": True, "data-callout-variant": "warning"},
                "content": [paragraph("Careful")],
            },
            {"type": "codeBlock", "content": [text("x = 1")]},
            {
                "type": "bulletList",
                "content": [
                    {"type": "listItem", "content": [paragraph("a")]},
                    {"type": "listItem", "content": [paragraph("b")]},
                ],
            },
            {
                "type": "orderedList",
                "content": [{"type": "listItem", "content": [paragraph("first")]}],
            },
            {"type": "horizontalRule"},
            {"type": "embed", "attrs": {"displayStyle": "inline", "url": "https://x.test"}},
        )
        restored = blocks_to_document(document_to_blocks(original))
        assert [(n.type, extract_text(n)) for n in restored.content] == [
            (n.type, extract_text(n)) for n in original.content
        ]

    def test_marks_are_lost(self) -> None:
        """Inline formatting does not survive conversion."""
        original = doc(
            {"type": "paragraph", "content": [{"type": "text", "text": "b", "marks": [{"type": "bold"}]}]}
        )
        restored = blocks_to_document(document_to_blocks(original))
        assert restored.content[0].content[0].marks == []


class TestBlockContentValidation:
    """validate_block_content."""

    def test_valid_payload(self) -> None:
        """Known types validate their payload."""
        model = validate_block_content("HEADING", {"text": "x", "level": 4})
        assert model.level == 4

    def test_unknown_type(self) -> None:
        """Unknown block types fail on blockType."""
        with pytest.raises(SchemaValidationError) as exc:
            validate_block_content("CAROUSEL", {})
        assert exc.value.issues[0].loc == "blockType"

    def test_bad_payload(self) -> None:
        """Malformed payloads report content-prefixed locations."""
        with pytest.raises(SchemaValidationError) as exc:
            validate_block_content("HEADING", {"text": "x", "level": 9})
        assert exc.value.issues[0].loc == "content.level"
