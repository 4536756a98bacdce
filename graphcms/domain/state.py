"""
Workflow state machine rules.

Pure functions over a catalog of WorkflowState records. The catalog plus each
state's allowed_transitions list forms a directed graph; a transition is valid
iff the target slug appears in the source state's list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from graphcms.domain.entities import WorkflowState


@dataclass(frozen=True)
class TransitionValidation:
    """Outcome of a transition check."""

    valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class StateTransitionRule:
    """One permitted edge of the workflow graph."""

    from_state: str
    to_state: str
    target_slug: str
    requires_approval: bool = False
    notify_roles: tuple[str, ...] = ()


def find_state(slug: str, states: Sequence[WorkflowState]) -> WorkflowState | None:
    for state in states:
        if state.slug == slug:
            return state
    return None


def validate_transition(
    from_slug: str,
    to_slug: str,
    states: Sequence[WorkflowState],
) -> TransitionValidation:
    """
    Check whether `from_slug` may move to `to_slug`.

    Same-state moves are treated like any other: they pass only when the
    state lists itself.
    """
    from_state = find_state(from_slug, states)
    if from_state is None:
        return TransitionValidation(False, f'Source state "{from_slug}" not found')

    to_state = find_state(to_slug, states)
    if to_state is None:
        return TransitionValidation(False, f'Target state "{to_slug}" not found')

    if to_slug not in (from_state.allowed_transitions or []):
        return TransitionValidation(
            False,
            f'Transition from "{from_state.name}" to "{to_state.name}" is not allowed',
        )

    return TransitionValidation(True)


def allowed_targets(current_slug: str, states: Sequence[WorkflowState]) -> list[WorkflowState]:
    """States reachable from `current_slug`, in catalog order."""
    current = find_state(current_slug, states)
    if current is None:
        return []
    allowed = set(current.allowed_transitions or [])
    return [s for s in states if s.slug in allowed]


def get_transition_rules(
    from_slug: str, states: Sequence[WorkflowState]
) -> list[StateTransitionRule]:
    """Rules declared by a state's allowed_transitions list."""
    from_state = find_state(from_slug, states)
    if from_state is None:
        return []
    return [
        StateTransitionRule(from_state=from_slug, to_state=target, target_slug=target)
        for target in from_state.allowed_transitions or []
    ]
