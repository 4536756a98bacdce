"""
Workflow component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphcms.domain.entities import WorkflowState
from graphcms.domain.relationships import HasStateProperties

# --- Validation Errors ---


@dataclass(frozen=True)
class WorkflowValidationError:
    """Workflow operation error."""

    code: str
    message: str
    field: str | None = None


# --- Results ---


@dataclass(frozen=True)
class ContentState:
    """Current state of a content item and the edge that assigned it."""

    state: WorkflowState
    properties: HasStateProperties


@dataclass(frozen=True)
class TransitionOptions:
    """
    Where a content item can go next.

    targets holds the declared transitions only. The current state stays
    selectable; whether to offer it is the caller's choice.
    """

    current: WorkflowState | None
    targets: list[WorkflowState] = field(default_factory=list)

    @property
    def selectable(self) -> list[WorkflowState]:
        """Current state followed by targets, without duplicates."""
        if self.current is None:
            return list(self.targets)
        return [self.current] + [s for s in self.targets if s.id != self.current.id]


# --- Input Models ---


@dataclass(frozen=True)
class TransitionInput:
    """Input for moving content to a new state."""

    content_id: str
    new_state_id: str
    assigned_by: str | None = None
    enforce: bool = True


# --- Output Models ---


@dataclass(frozen=True)
class TransitionOutput:
    """Output from a transition."""

    state: WorkflowState | None
    errors: list[WorkflowValidationError]
    success: bool
