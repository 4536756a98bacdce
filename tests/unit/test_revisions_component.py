"""
Revision history tests against the in-memory store.
"""

from __future__ import annotations

import pytest

from graphcms.components.blocks import Document, load_content_blocks, save_content_blocks
from graphcms.components.revisions import (
    CreateRevisionInput,
    RestoreRevisionInput,
    compare_revisions,
    create_revision,
    get_current_revision,
    get_revision,
    get_revision_author,
    get_revisions,
    restore_revision,
    run_create_revision,
    run_restore_revision,
)
from graphcms.core.errors import SchemaValidationError
from tests.fakes import InMemoryStore


def paragraphs(*texts: str) -> Document:
    return Document.from_dict(
        {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": t}]} for t in texts
            ],
        }
    )


@pytest.fixture
def content(store: InMemoryStore):
    return store.seed("Content", title="First title", slug="post", contentType="POST")


@pytest.fixture
def author(store: InMemoryStore):
    return store.seed("Author", name="Ada", email="ada@example.com")


class TestCreateRevision:
    """create_revision and lookups."""

    @pytest.mark.asyncio
    async def test_first_revision(self, store: InMemoryStore, content, author) -> None:
        """The first revision is number 1, current, and snapshots the blocks."""
        await save_content_blocks(store, content.id, paragraphs("a", "b"))
        revision = await create_revision(store, content.id, author.id, "Initial")
        assert revision.revision_number == 1
        assert revision.is_current
        assert revision.title == "First title"
        assert revision.change_message == "Initial"
        assert sorted(revision.blocks_snapshot) == ["0", "1"]
        assert revision.blocks_snapshot["1"]["content"]["text"] == "b"
        assert (await get_revision_author(store, revision.id)).id == author.id

    @pytest.mark.asyncio
    async def test_numbering_and_current_flag(self, store: InMemoryStore, content) -> None:
        """Numbers increase and only the newest is current."""
        await create_revision(store, content.id)
        await create_revision(store, content.id)
        third = await create_revision(store, content.id)
        assert third.revision_number == 3

        revisions = await get_revisions(store, content.id)
        assert [r.revision_number for r in revisions] == [3, 2, 1]
        assert [r.is_current for r in revisions] == [True, False, False]
        assert (await get_current_revision(store, content.id)).id == third.id

    @pytest.mark.asyncio
    async def test_no_author(self, store: InMemoryStore, content) -> None:
        """Without an author no REVISION_CREATED_BY edge is made."""
        revision = await create_revision(store, content.id)
        assert await get_revision_author(store, revision.id) is None

    @pytest.mark.asyncio
    async def test_no_revisions(self, store: InMemoryStore, content) -> None:
        """Content without history has no current revision."""
        assert await get_revisions(store, content.id) == []
        assert await get_current_revision(store, content.id) is None

    @pytest.mark.asyncio
    async def test_diff_between_revisions(self, store: InMemoryStore, content) -> None:
        """Stored revisions can be compared."""
        await save_content_blocks(store, content.id, paragraphs("a"))
        first = await create_revision(store, content.id)
        await save_content_blocks(store, content.id, paragraphs("a", "b"))
        second = await create_revision(store, content.id)
        diff = compare_revisions(first, second)
        assert diff.added == ("1",)
        assert not diff.title_changed


class TestRestoreRevision:
    """restore_revision."""

    @pytest.mark.asyncio
    async def test_restore(self, store: InMemoryStore, content, author) -> None:
        """Blocks and title are rewritten and the restore is recorded."""
        await save_content_blocks(store, content.id, paragraphs("old"))
        first = await create_revision(store, content.id)

        await store.patch("Content", content.id, {"title": "Second title"})
        await save_content_blocks(store, content.id, paragraphs("new", "newer"))
        await create_revision(store, content.id)

        restored = await restore_revision(store, content.id, first.id, author.id)

        assert restored.revision_number == 3
        assert restored.change_message == "Restored from revision #1"
        assert restored.title == "First title"
        assert (await store.get("Content", content.id)).title == "First title"
        blocks = await load_content_blocks(store, content.id)
        assert [b.content["text"] for b in blocks] == ["old"]
        assert [r.is_current for r in await get_revisions(store, content.id)] == [
            True,
            False,
            False,
        ]

    @pytest.mark.asyncio
    async def test_bad_snapshot_keys(self, store: InMemoryStore, content) -> None:
        """Snapshots keyed by something other than positions are rejected."""
        revision = store.seed(
            "ContentRevision",
            revisionNumber=1,
            title="x",
            blocksSnapshot={"first": {"blockType": "PARAGRAPH", "content": {"text": "a"}}},
            isCurrent=True,
        )
        with pytest.raises(SchemaValidationError):
            await restore_revision(store, content.id, revision.id)

    @pytest.mark.asyncio
    async def test_get_revision(self, store: InMemoryStore, content) -> None:
        """Revisions are fetched by id."""
        revision = await create_revision(store, content.id)
        assert (await get_revision(store, revision.id)).revision_number == 1


class TestRunRevisions:
    """Shell entry points."""

    @pytest.mark.asyncio
    async def test_run_create(self, store: InMemoryStore, content) -> None:
        """Successful creation."""
        output = await run_create_revision(CreateRevisionInput(content_id=content.id), store)
        assert output.success
        assert output.revision.revision_number == 1

    @pytest.mark.asyncio
    async def test_run_create_missing_content(self, store: InMemoryStore) -> None:
        """Missing content is NOT_FOUND."""
        output = await run_create_revision(CreateRevisionInput(content_id="nope"), store)
        assert not output.success
        assert output.errors[0].code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_run_restore_missing_revision(self, store: InMemoryStore, content) -> None:
        """Missing revisions are NOT_FOUND."""
        output = await run_restore_revision(
            RestoreRevisionInput(content_id=content.id, revision_id="nope"), store
        )
        assert output.errors[0].code == "NOT_FOUND"
