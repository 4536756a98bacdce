"""
Content component - Read-side composition for content items.
"""

from .component import (
    CONTENT_RELATIONS,
    get_content_authors,
    get_content_by_slug,
    get_content_categories,
    get_content_media,
    get_content_with_featured_image,
    get_content_with_primary_author,
    get_content_with_relations,
    get_draft_content,
    get_published_content,
    get_published_content_by_slug_and_type,
    list_all_content,
    search_content_by_tag,
)
from .models import (
    AuthorCredit,
    CategoryAssignment,
    ContentWithFeaturedImage,
    ContentWithPrimaryAuthor,
    ContentWithRelations,
    MediaAttachment,
)

__all__ = [
    # Lookups
    "get_content_by_slug",
    "search_content_by_tag",
    "list_all_content",
    "get_published_content",
    "get_draft_content",
    "get_published_content_by_slug_and_type",
    # Relations
    "get_content_with_primary_author",
    "get_content_with_featured_image",
    "get_content_authors",
    "get_content_media",
    "get_content_categories",
    "get_content_with_relations",
    "CONTENT_RELATIONS",
    # Models
    "AuthorCredit",
    "MediaAttachment",
    "CategoryAssignment",
    "ContentWithPrimaryAuthor",
    "ContentWithFeaturedImage",
    "ContentWithRelations",
]
