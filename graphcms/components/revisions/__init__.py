"""
Revisions component - Content version history and diffs.
"""

from ._impl import build_blocks_snapshot, compare_revisions
from .component import (
    create_revision,
    get_current_revision,
    get_revision,
    get_revision_author,
    get_revisions,
    restore_revision,
    run_create_revision,
    run_restore_revision,
)
from .models import (
    CreateRevisionInput,
    RestoreRevisionInput,
    RevisionDiff,
    RevisionOutput,
    RevisionValidationError,
)

__all__ = [
    # Entry points
    "run_create_revision",
    "run_restore_revision",
    # Pure
    "compare_revisions",
    "build_blocks_snapshot",
    # Store-backed
    "create_revision",
    "get_revisions",
    "get_revision",
    "get_current_revision",
    "get_revision_author",
    "restore_revision",
    # Models
    "RevisionDiff",
    "CreateRevisionInput",
    "RestoreRevisionInput",
    "RevisionOutput",
    "RevisionValidationError",
]
