"""
Blocks component - Document/block converter.

Functional core: no store access.

Node to block mapping:
    paragraph       -> PARAGRAPH
    heading         -> HEADING
    image           -> IMAGE
    blockquote      -> QUOTE, or CALLOUT when attrs["data-callout"] is set
    codeBlock       -> CODE
    bulletList      -> LIST (ordered=False)
    orderedList     -> LIST (ordered=True)
    horizontalRule  -> DIVIDER
    embed           -> EMBED

Unmapped node types are dropped and positions are reassigned densely over the
surviving nodes. Only plain text survives a round trip; marks do not.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from graphcms.domain.blocks import (
    CalloutContent,
    CodeContent,
    DividerContent,
    EmbedContent,
    HeadingContent,
    ImageContent,
    ListContent,
    ParagraphContent,
    QuoteContent,
)
from graphcms.domain.entities import CreateContentBlock

from .models import DocNode, Document

NODE_TO_BLOCK_TYPE: dict[str, str] = {
    "paragraph": "PARAGRAPH",
    "heading": "HEADING",
    "image": "IMAGE",
    "blockquote": "QUOTE",
    "codeBlock": "CODE",
    "bulletList": "LIST",
    "orderedList": "LIST",
    "horizontalRule": "DIVIDER",
    "embed": "EMBED",
}

CALLOUT_VARIANTS = ("info", "warning", "success", "error")
EMBED_STYLES = ("card", "inline", "full")


class BlockLike(Protocol):
    block_type: str
    content: dict[str, Any]
    position: int


# --- Document -> blocks ---


def extract_text(node: DocNode) -> str:
    """Concatenate all descendant text leaves."""
    if node.text:
        return node.text
    return "".join(extract_text(child) for child in node.content)


def block_type_for(node: DocNode) -> str | None:
    if node.type == "blockquote" and node.attrs.get("data-callout"):
        return "CALLOUT"
    return NODE_TO_BLOCK_TYPE.get(node.type)


def node_to_block_content(node: DocNode, block_type: str) -> dict[str, Any]:
    """Build the typed content payload for a mapped node."""
    attrs = node.attrs
    match block_type:
        case "PARAGRAPH":
            model = ParagraphContent(text=extract_text(node))
        case "HEADING":
            level = attrs.get("level")
            if not isinstance(level, int) or isinstance(level, bool) or not 1 <= level <= 6:
                level = 2
            model = HeadingContent(text=extract_text(node), level=level)
        case "IMAGE":
            alt = attrs.get("alt")
            model = ImageContent(src=attrs.get("src"), alt=alt, caption=alt)
        case "CALLOUT":
            variant = attrs.get("data-callout-variant")
            model = CalloutContent(
                text=extract_text(node),
                variant=variant if variant in CALLOUT_VARIANTS else "info",
                title=attrs.get("data-callout-title"),
            )
        case "QUOTE":
            model = QuoteContent(text=extract_text(node), attribution=None)
        case "CODE":
            model = CodeContent(code=extract_text(node), language=attrs.get("language"))
        case "LIST":
            model = ListContent(
                items=[extract_text(item) for item in node.content],
                ordered=node.type == "orderedList",
            )
        case "DIVIDER":
            model = DividerContent(style="line")
        case "EMBED":
            style = attrs.get("displayStyle")
            model = EmbedContent(
                display_style=style if style in EMBED_STYLES else "card",
                content_id=attrs.get("contentId"),
                url=attrs.get("url"),
            )
        case _:
            raise ValueError(f"Unmapped block type: {block_type}")
    return model.to_wire()


def document_to_blocks(doc: Document) -> list[CreateContentBlock]:
    """
    Flatten a document into positioned blocks.

    Position is the index among mapped nodes, so dropped nodes leave no gap.
    """
    blocks: list[CreateContentBlock] = []
    for node in doc.content:
        block_type = block_type_for(node)
        if block_type is None:
            continue
        blocks.append(
            CreateContentBlock(
                block_type=block_type,
                content=node_to_block_content(node, block_type),
                position=len(blocks),
                metadata={},
            )
        )
    return blocks


# --- Blocks -> document ---


def _text_node(text: str) -> DocNode:
    return DocNode(type="text", text=text)


def _paragraph(text: str) -> DocNode:
    return DocNode(type="paragraph", content=[_text_node(text)])


def block_to_node(block: BlockLike) -> DocNode | None:
    """Inverse of node_to_block_content; unknown block types give None."""
    content = block.content or {}
    match block.block_type:
        case "PARAGRAPH":
            return _paragraph(content.get("text") or "")
        case "HEADING":
            return DocNode(
                type="heading",
                attrs={"level": content.get("level") or 2},
                content=[_text_node(content.get("text") or "")],
            )
        case "IMAGE":
            return DocNode(
                type="image",
                attrs={
                    "src": content.get("src") or "",
                    "alt": content.get("alt") or content.get("caption") or "",
                },
            )
        case "QUOTE":
            return DocNode(type="blockquote", content=[_paragraph(content.get("text") or "")])
        case "CALLOUT":
            return DocNode(
                type="blockquote",
                attrs={
                    "data-callout": True,
                    "data-callout-variant": content.get("variant") or "info",
                    "data-callout-title": content.get("title"),
                },
                content=[_paragraph(content.get("text") or "")],
            )
        case "CODE":
            return DocNode(
                type="codeBlock",
                attrs={"language": content.get("language")},
                content=[_text_node(content.get("code") or "")],
            )
        case "LIST":
            items = content.get("items") or []
            return DocNode(
                type="orderedList" if content.get("ordered") else "bulletList",
                content=[DocNode(type="listItem", content=[_paragraph(item)]) for item in items],
            )
        case "DIVIDER":
            return DocNode(type="horizontalRule")
        case "EMBED":
            return DocNode(
                type="embed",
                attrs={
                    "displayStyle": content.get("displayStyle") or "card",
                    "contentId": content.get("contentId"),
                    "url": content.get("url"),
                },
            )
        case _:
            return None


def blocks_to_document(blocks: Iterable[BlockLike]) -> Document:
    """Rebuild a document; input order is ignored, position decides."""
    ordered = sorted(blocks, key=lambda b: b.position)
    nodes = [block_to_node(b) for b in ordered]
    return Document(content=[n for n in nodes if n is not None])
