"""
Entity models for the content store.

Every entity has a full shape (as returned by the store, with id and system
timestamps) and a create shape (what a client may send). Field names are
snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from graphcms.core.errors import SchemaValidationError

# --- Enums / Literals ---
ContentType = Literal["PAGE", "POST", "ARTICLE"]
BlockType = Literal[
    "PARAGRAPH",
    "HEADING",
    "IMAGE",
    "QUOTE",
    "CODE",
    "CALLOUT",
    "EMBED",
    "LIST",
    "DIVIDER",
]
GlobalBlockType = Literal["AUTHOR_BIO", "RELATED_POSTS", "NEWSLETTER", "CTA", "CUSTOM"]
PageSectionType = Literal["CONTENT_LIST", "SINGLE_CONTENT", "STATIC_BLOCK", "GLOBAL_BLOCK"]
OrderDirection = Literal["ASC", "DESC"]


class CmsModel(BaseModel):
    """Base for all wire models: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)


class EntityRecord(CmsModel):
    """Fields the store assigns to every record."""

    id: str
    created_at: datetime
    updated_at: datetime
    # Populated by query traversals with include=True
    relationships: dict[str, list[dict[str, Any]]] | None = Field(
        default=None, alias="_relationships", exclude=True
    )


# --- Content ---


class ContentFields(CmsModel):
    title: str
    slug: str
    excerpt: str | None = None
    content_type: ContentType
    metadata: dict[str, Any] | None = None
    published_at: datetime | None = None
    tags: list[str] | None = None
    is_system: bool | None = None


class Content(EntityRecord, ContentFields):
    pass


class CreateContent(ContentFields):
    pass


# --- Author ---


class AuthorFields(CmsModel):
    name: str
    email: str
    bio: str | None = None
    avatar_url: str | None = None
    is_system: bool | None = None


class Author(EntityRecord, AuthorFields):
    pass


class CreateAuthor(AuthorFields):
    pass


# --- Category (hierarchy lives on CATEGORY_PARENT edges) ---


class CategoryFields(CmsModel):
    name: str
    slug: str
    description: str | None = None
    is_system: bool | None = None


class Category(EntityRecord, CategoryFields):
    pass


class CreateCategory(CategoryFields):
    pass


# --- Media ---


class MediaFields(CmsModel):
    filename: str
    url: str
    mime_type: str
    size: int
    alt: str | None = None
    caption: str | None = None
    is_system: bool | None = None


class Media(EntityRecord, MediaFields):
    pass


class CreateMedia(MediaFields):
    pass


# --- ContentBlock ---


class ContentBlockFields(CmsModel):
    block_type: BlockType
    content: dict[str, Any]
    position: int
    metadata: dict[str, Any] | None = None
    is_system: bool | None = None


class ContentBlock(EntityRecord, ContentBlockFields):
    pass


class CreateContentBlock(ContentBlockFields):
    pass


# --- ContentRevision ---


class ContentRevisionFields(CmsModel):
    revision_number: int
    title: str
    # Keyed by block position as a string
    blocks_snapshot: dict[str, Any]
    change_message: str | None = None
    is_current: bool
    is_system: bool | None = None


class ContentRevision(EntityRecord, ContentRevisionFields):
    pass


class CreateContentRevision(ContentRevisionFields):
    pass


# --- WorkflowState ---


class WorkflowStateFields(CmsModel):
    name: str
    slug: str
    color: str
    description: str | None = None
    position: int
    allowed_transitions: list[str] | None = None
    is_system: bool | None = None


class WorkflowState(EntityRecord, WorkflowStateFields):
    pass


class CreateWorkflowState(WorkflowStateFields):
    pass


# --- Layout ---


class LayoutFields(CmsModel):
    name: str
    slug: str
    description: str | None = None
    # { regionId: { name, maxBlocks } }
    regions: dict[str, Any]
    template: str
    is_system: bool | None = None


class Layout(EntityRecord, LayoutFields):
    pass


class CreateLayout(LayoutFields):
    pass


class LayoutRegionConfig(CmsModel):
    name: str
    max_blocks: int | None = None


# --- LayoutPlacement ---


class LayoutPlacementFields(CmsModel):
    region: str
    position: int
    settings: dict[str, Any] | None = None
    is_system: bool | None = None


class LayoutPlacement(EntityRecord, LayoutPlacementFields):
    pass


class CreateLayoutPlacement(LayoutPlacementFields):
    pass


# --- Block (reusable, global) ---


class BlockFields(CmsModel):
    name: str
    block_type: GlobalBlockType
    content: dict[str, Any]
    is_global: bool
    is_system: bool | None = None


class Block(EntityRecord, BlockFields):
    pass


class CreateBlock(BlockFields):
    pass


# --- Page ---


class PageFields(CmsModel):
    title: str
    slug: str
    path: str
    description: str | None = None
    is_published: bool
    show_in_nav: bool
    nav_order: int | None = None
    metadata: dict[str, Any] | None = None
    is_system: bool | None = None


class Page(EntityRecord, PageFields):
    pass


class CreatePage(PageFields):
    pass


# --- PageSection ---


class PageSectionFields(CmsModel):
    name: str
    section_type: PageSectionType
    config: dict[str, Any] | None = None
    position: int
    is_system: bool | None = None


class PageSection(EntityRecord, PageSectionFields):
    pass


class CreatePageSection(PageSectionFields):
    pass


# --- Section config payloads ---


class ContentListConfig(CmsModel):
    limit: int = 10
    order_by: str = "publishedAt"
    order_direction: OrderDirection = "DESC"
    content_type: ContentType | None = None
    show_pagination: bool = True


class SingleContentConfig(CmsModel):
    display_style: Literal["full", "card", "hero"] = "full"


class StaticBlockConfig(CmsModel):
    block_type: str | None = None


class GlobalBlockConfig(CmsModel):
    block_id: str | None = None
    block_type: GlobalBlockType | None = None


SECTION_CONFIG_MODELS: dict[str, type[CmsModel]] = {
    "CONTENT_LIST": ContentListConfig,
    "SINGLE_CONTENT": SingleContentConfig,
    "STATIC_BLOCK": StaticBlockConfig,
    "GLOBAL_BLOCK": GlobalBlockConfig,
}


def parse_section_config(section: PageSection) -> CmsModel:
    """
    Parse a section's config into the model for its section type.

    Missing config yields the type's defaults.

    Raises:
        SchemaValidationError: If the config does not fit the section type.
    """
    model = SECTION_CONFIG_MODELS[section.section_type]
    try:
        return model.model_validate(section.config or {})
    except ValidationError as e:
        raise SchemaValidationError.from_pydantic(model.__name__, e, prefix="config") from e
