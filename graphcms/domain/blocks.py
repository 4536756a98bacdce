"""
Typed content payloads for ContentBlock.

ContentBlock.content is an open map on the wire; these models describe what
each block type is expected to carry.
"""

from typing import Any, Literal

from pydantic import Field, ValidationError

from graphcms.core.errors import SchemaIssue, SchemaValidationError
from graphcms.domain.entities import CmsModel


class ParagraphContent(CmsModel):
    text: str
    format: Literal["plain", "markdown", "html"] = "plain"


class HeadingContent(CmsModel):
    text: str
    level: int = Field(default=2, ge=1, le=6)


class ImageContent(CmsModel):
    src: str | None = None
    alt: str | None = None
    caption: str | None = None


class QuoteContent(CmsModel):
    text: str
    attribution: str | None = None


class CodeContent(CmsModel):
    code: str
    language: str | None = None
    filename: str | None = None


class CalloutContent(CmsModel):
    text: str
    variant: Literal["info", "warning", "success", "error"] = "info"
    title: str | None = None


class EmbedContent(CmsModel):
    display_style: Literal["card", "inline", "full"] = "card"
    content_id: str | None = None
    url: str | None = None


class ListContent(CmsModel):
    items: list[str]
    ordered: bool = False


class DividerContent(CmsModel):
    style: Literal["line", "dots", "space"] = "line"


BLOCK_CONTENT_MODELS: dict[str, type[CmsModel]] = {
    "PARAGRAPH": ParagraphContent,
    "HEADING": HeadingContent,
    "IMAGE": ImageContent,
    "QUOTE": QuoteContent,
    "CODE": CodeContent,
    "CALLOUT": CalloutContent,
    "EMBED": EmbedContent,
    "LIST": ListContent,
    "DIVIDER": DividerContent,
}


def validate_block_content(block_type: str, content: dict[str, Any]) -> CmsModel:
    """
    Validate a block's content payload against its block type.

    Raises:
        SchemaValidationError: Unknown block type or malformed payload.
    """
    model = BLOCK_CONTENT_MODELS.get(block_type)
    if model is None:
        raise SchemaValidationError(
            "ContentBlock", [SchemaIssue(loc="blockType", msg=f"Unknown block type '{block_type}'")]
        )
    try:
        return model.model_validate(content)
    except ValidationError as exc:
        raise SchemaValidationError.from_pydantic(f"{block_type} block", exc, prefix="content") from exc
