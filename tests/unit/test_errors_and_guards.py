"""
Error taxonomy and system content guard tests.
"""

from __future__ import annotations

import pytest

from graphcms.components.guards import ensure_mutable, is_mutable, system_content_response
from graphcms.core.errors import (
    CmsError,
    PolicyViolationError,
    QueryValidationError,
    SchemaIssue,
    SchemaValidationError,
    StoreError,
    SystemContentError,
    TransitionError,
)
from tests.fakes import InMemoryStore


class TestErrors:
    """Exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Every error is a CmsError."""
        assert issubclass(QueryValidationError, SchemaValidationError)
        assert issubclass(SystemContentError, PolicyViolationError)
        for cls in (SchemaValidationError, StoreError, PolicyViolationError, TransitionError):
            assert issubclass(cls, CmsError)

    def test_schema_error_message(self) -> None:
        """The message lists each issue."""
        err = SchemaValidationError("Content", [SchemaIssue("slug", "Field required")])
        assert str(err) == "Invalid Content: slug: Field required"

    def test_store_error_not_found(self) -> None:
        """404 is recognised as not found."""
        assert StoreError("gone", 404).is_not_found
        assert not StoreError("boom", 500).is_not_found

    def test_system_content_error(self) -> None:
        """System content errors carry a fixed code and a 403 status."""
        err = SystemContentError("Content")
        assert err.code == "SYSTEM_CONTENT_PROTECTED"
        assert err.status_code == 403
        assert "Demo content cannot be modified" in str(err)


class TestGuards:
    """ensure_mutable, is_mutable and system_content_response."""

    @pytest.mark.asyncio
    async def test_ensure_mutable_rejects_system(self, store: InMemoryStore) -> None:
        """System records raise."""
        author = store.seed("Author", name="Demo", email="d@example.com", isSystem=True)
        with pytest.raises(SystemContentError):
            await ensure_mutable(store, "Author", author.id)

    @pytest.mark.asyncio
    async def test_ensure_mutable_allows_normal(self, store: InMemoryStore) -> None:
        """Ordinary records pass."""
        author = store.seed("Author", name="Ada", email="a@example.com")
        await ensure_mutable(store, "Author", author.id)

    @pytest.mark.asyncio
    async def test_ensure_mutable_missing_propagates(self, store: InMemoryStore) -> None:
        """A missing record surfaces the store error."""
        with pytest.raises(StoreError):
            await ensure_mutable(store, "Author", "nope")

    @pytest.mark.asyncio
    async def test_is_mutable(self, store: InMemoryStore) -> None:
        """Only system records are immutable; missing ones count as mutable."""
        demo = store.seed("Category", name="Demo", slug="demo", isSystem=True)
        real = store.seed("Category", name="Real", slug="real", isSystem=False)
        assert not await is_mutable(store, "Category", demo.id)
        assert await is_mutable(store, "Category", real.id)
        assert await is_mutable(store, "Category", "missing")

    @pytest.mark.asyncio
    async def test_is_mutable_other_errors_raise(self, store: InMemoryStore) -> None:
        """Failures other than 404 propagate."""
        store.fail("get", "Category", StoreError("down", 503))
        with pytest.raises(StoreError):
            await is_mutable(store, "Category", "any")

    def test_response_payload(self) -> None:
        """The 403 body names the entity and the code."""
        body = system_content_response("Media")
        assert body["code"] == "SYSTEM_CONTENT_PROTECTED"
        assert body["message"].startswith("Demo media cannot be modified")
