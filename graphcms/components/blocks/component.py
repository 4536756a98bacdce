"""
Blocks component - Persistence of documents as ContentBlock records.

Each block is its own entity linked from Content by a HAS_BLOCK edge carrying
the block position. Saving replaces the whole set; it is not atomic. A
partially failed save can be retried: blocks that are already gone are
skipped.

Shell Layer - store access and error conversion.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable

from graphcms.core.errors import (
    PolicyViolationError,
    SchemaValidationError,
    StoreError,
)
from graphcms.core.ports.store import StorePort
from graphcms.domain.entities import Author, Content, ContentBlock, Media

from ._impl import blocks_to_document, document_to_blocks
from .models import BlocksValidationError, Document, SaveBlocksInput, SaveBlocksOutput

logger = logging.getLogger(__name__)


async def delete_content_blocks(store: StorePort, content_id: str) -> int:
    """
    Remove every HAS_BLOCK edge of a content item and the blocks behind them.

    Returns the number of edges found.
    """
    rels = await store.get_relationships(
        "Content", content_id, "HAS_BLOCK", "out", "ContentBlock"
    )
    for rel in rels:
        block_id = rel.target.id
        await _delete_ignoring_missing(
            store.delete_relationship("Content", content_id, "HAS_BLOCK", block_id),
            f"HAS_BLOCK edge to {block_id}",
        )
        await _delete_ignoring_missing(
            store.delete("ContentBlock", block_id), f"ContentBlock {block_id}"
        )
    return len(rels)


async def _delete_ignoring_missing(call: Awaitable[None], what: str) -> None:
    try:
        await call
    except StoreError as e:
        if not e.is_not_found:
            raise
        logger.warning("%s already deleted; skipping", what)


async def save_content_blocks(
    store: StorePort, content_id: str, document: Document
) -> list[ContentBlock]:
    """Replace a content item's blocks with the blocks of `document`."""
    new_blocks = document_to_blocks(document)
    removed = await delete_content_blocks(store, content_id)

    created: list[ContentBlock] = []
    for i, block in enumerate(new_blocks):
        record = await store.create("ContentBlock", block.model_copy(update={"position": i}))
        await store.create_relationship(
            "Content", content_id, "HAS_BLOCK", record.id, {"position": i}
        )
        created.append(record)

    logger.info(
        "Saved %d blocks for content %s (replaced %d)", len(created), content_id, removed
    )
    return created


async def load_content_blocks(store: StorePort, content_id: str) -> list[ContentBlock]:
    """Blocks of a content item sorted by block position."""
    rels = await store.get_relationships(
        "Content", content_id, "HAS_BLOCK", "out", "ContentBlock"
    )
    return sorted((r.target for r in rels), key=lambda b: b.position)


async def load_content_as_document(store: StorePort, content_id: str) -> Document:
    return blocks_to_document(await load_content_blocks(store, content_id))


async def get_content_blocks(
    store: StorePort, content_id: str
) -> list[tuple[ContentBlock, int]]:
    """(block, edge position) pairs ordered by the edge position."""
    rels = await store.get_relationships(
        "Content", content_id, "HAS_BLOCK", "out", "ContentBlock"
    )
    pairs = [(r.target, r.relationship.properties.position) for r in rels]
    return sorted(pairs, key=lambda pair: pair[1])


async def get_block_media(store: StorePort, block_id: str) -> Media | None:
    rels = await store.get_relationships(
        "ContentBlock", block_id, "BLOCK_REFERENCES_MEDIA", "out", "Media"
    )
    return rels[0].target if rels else None


async def get_block_author(store: StorePort, block_id: str) -> Author | None:
    rels = await store.get_relationships(
        "ContentBlock", block_id, "BLOCK_REFERENCES_AUTHOR", "out", "Author"
    )
    return rels[0].target if rels else None


async def get_block_embedded_content(store: StorePort, block_id: str) -> Content | None:
    rels = await store.get_relationships(
        "ContentBlock", block_id, "BLOCK_REFERENCES_CONTENT", "out", "Content"
    )
    return rels[0].target if rels else None


# --- Shell Layer Functions ---


async def run_save_blocks(input_data: SaveBlocksInput, store: StorePort) -> SaveBlocksOutput:
    """Save a document, reporting failures as errors instead of raising."""
    errors: list[BlocksValidationError] = []
    try:
        blocks = await save_content_blocks(store, input_data.content_id, input_data.document)
    except SchemaValidationError as e:
        errors.append(BlocksValidationError("VALIDATION_ERROR", str(e), "document"))
    except PolicyViolationError as e:
        errors.append(BlocksValidationError(e.code, str(e)))
    except StoreError as e:
        # Earlier deletes/creates are not rolled back; re-read to see the state
        errors.append(BlocksValidationError("STORE_ERROR", e.message))
    else:
        return SaveBlocksOutput(blocks=blocks, errors=[], success=True)

    return SaveBlocksOutput(blocks=[], errors=errors, success=False)
