"""
Revisions component - Version history for content items.

Revisions hang off Content by HAS_REVISION edges. One revision per content
item is current; creating or restoring a revision clears the flag on every
other revision first.

Shell Layer - store access and error conversion.
"""

from __future__ import annotations

import logging

from graphcms.components.blocks.component import delete_content_blocks, load_content_blocks
from graphcms.core.errors import (
    PolicyViolationError,
    SchemaIssue,
    SchemaValidationError,
    StoreError,
)
from graphcms.core.ports.store import StorePort
from graphcms.domain.entities import Author, ContentRevision, CreateContentRevision

from ._impl import build_blocks_snapshot
from .models import (
    CreateRevisionInput,
    RestoreRevisionInput,
    RevisionOutput,
    RevisionValidationError,
)

logger = logging.getLogger(__name__)


async def _revision_records(store: StorePort, content_id: str) -> list[ContentRevision]:
    rels = await store.get_relationships(
        "Content", content_id, "HAS_REVISION", "out", "ContentRevision"
    )
    return [r.target for r in rels]


async def _clear_current(store: StorePort, revisions: list[ContentRevision]) -> None:
    for revision in revisions:
        if revision.is_current:
            await store.patch("ContentRevision", revision.id, {"isCurrent": False})


async def create_revision(
    store: StorePort,
    content_id: str,
    author_id: str | None = None,
    change_message: str | None = None,
) -> ContentRevision:
    """Snapshot the content's title and blocks as the new current revision."""
    content = await store.get("Content", content_id)
    blocks = await load_content_blocks(store, content_id)
    existing = await _revision_records(store, content_id)

    await _clear_current(store, existing)

    number = max((r.revision_number for r in existing), default=0) + 1
    revision = await store.create(
        "ContentRevision",
        CreateContentRevision(
            revision_number=number,
            title=content.title,
            blocks_snapshot=build_blocks_snapshot(blocks),
            change_message=change_message,
            is_current=True,
        ),
    )

    await store.create_relationship("Content", content_id, "HAS_REVISION", revision.id, {})
    if author_id:
        await store.create_relationship(
            "ContentRevision", revision.id, "REVISION_CREATED_BY", author_id, {}
        )

    logger.info("Created revision #%d for content %s", number, content_id)
    return revision


async def get_revisions(store: StorePort, content_id: str) -> list[ContentRevision]:
    """Revisions newest first."""
    revisions = await _revision_records(store, content_id)
    return sorted(revisions, key=lambda r: r.revision_number, reverse=True)


async def get_revision(store: StorePort, revision_id: str) -> ContentRevision:
    return await store.get("ContentRevision", revision_id)


async def get_current_revision(store: StorePort, content_id: str) -> ContentRevision | None:
    for revision in await get_revisions(store, content_id):
        if revision.is_current:
            return revision
    return None


async def get_revision_author(store: StorePort, revision_id: str) -> Author | None:
    rels = await store.get_relationships(
        "ContentRevision", revision_id, "REVISION_CREATED_BY", "out", "Author"
    )
    return rels[0].target if rels else None


async def restore_revision(
    store: StorePort,
    content_id: str,
    revision_id: str,
    author_id: str | None = None,
) -> ContentRevision:
    """
    Rewrite the content's blocks and title from a revision.

    The restore itself is recorded as a new revision. Not atomic: a failure
    part way leaves the blocks partially rewritten.
    """
    revision = await store.get("ContentRevision", revision_id)
    snapshot = revision.blocks_snapshot or {}
    try:
        positions = sorted(int(pos) for pos in snapshot)
    except ValueError as e:
        raise SchemaValidationError(
            "ContentRevision",
            [SchemaIssue(loc="blocksSnapshot", msg="Snapshot keys must be integer positions")],
        ) from e

    await _clear_current(store, await _revision_records(store, content_id))
    await delete_content_blocks(store, content_id)

    for position in positions:
        data = snapshot[str(position)]
        block = await store.create(
            "ContentBlock",
            {
                "blockType": data.get("blockType"),
                "content": data.get("content") or {},
                "position": position,
                "metadata": data.get("metadata") or {},
            },
        )
        await store.create_relationship(
            "Content", content_id, "HAS_BLOCK", block.id, {"position": position}
        )

    await store.patch("Content", content_id, {"title": revision.title})

    logger.info(
        "Restored content %s from revision #%d", content_id, revision.revision_number
    )
    return await create_revision(
        store,
        content_id,
        author_id,
        f"Restored from revision #{revision.revision_number}",
    )


# --- Shell Layer Functions ---


async def run_create_revision(
    input_data: CreateRevisionInput, store: StorePort
) -> RevisionOutput:
    """Create a revision, reporting failures as errors."""
    try:
        revision = await create_revision(
            store, input_data.content_id, input_data.author_id, input_data.change_message
        )
    except (SchemaValidationError, PolicyViolationError, StoreError) as e:
        return _failed(e)
    return RevisionOutput(revision=revision, errors=[], success=True)


async def run_restore_revision(
    input_data: RestoreRevisionInput, store: StorePort
) -> RevisionOutput:
    """Restore a revision, reporting failures as errors."""
    try:
        revision = await restore_revision(
            store, input_data.content_id, input_data.revision_id, input_data.author_id
        )
    except (SchemaValidationError, PolicyViolationError, StoreError) as e:
        return _failed(e)
    return RevisionOutput(revision=revision, errors=[], success=True)


def _failed(error: Exception) -> RevisionOutput:
    if isinstance(error, StoreError):
        code = "NOT_FOUND" if error.is_not_found else "STORE_ERROR"
        message = error.message
    elif isinstance(error, PolicyViolationError):
        code, message = error.code, str(error)
    else:
        code, message = "VALIDATION_ERROR", str(error)
    return RevisionOutput(
        revision=None,
        errors=[RevisionValidationError(code=code, message=message)],
        success=False,
    )
