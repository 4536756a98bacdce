"""
Revisions component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphcms.domain.entities import ContentRevision

# --- Diff ---


@dataclass(frozen=True)
class RevisionDiff:
    """Structural difference between two block snapshots."""

    title_changed: bool
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()

    @property
    def blocks_added(self) -> int:
        return len(self.added)

    @property
    def blocks_removed(self) -> int:
        return len(self.removed)

    @property
    def blocks_modified(self) -> int:
        return len(self.modified)

    @property
    def has_changes(self) -> bool:
        return self.title_changed or bool(self.added or self.removed or self.modified)


# --- Validation Errors ---


@dataclass(frozen=True)
class RevisionValidationError:
    """Revision operation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateRevisionInput:
    """Input for snapshotting a content item."""

    content_id: str
    author_id: str | None = None
    change_message: str | None = None


@dataclass(frozen=True)
class RestoreRevisionInput:
    """Input for restoring a revision."""

    content_id: str
    revision_id: str
    author_id: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class RevisionOutput:
    """Output from a revision operation."""

    revision: ContentRevision | None
    errors: list[RevisionValidationError]
    success: bool
