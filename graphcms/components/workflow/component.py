"""
Workflow component - Content lifecycle and state transitions.

A content item holds at most one current state through a HAS_STATE edge.
Transitions replace that edge; reaching the published state also stamps
Content.publishedAt.

Shell Layer - store access and error conversion.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

from graphcms.adapters.clock import SystemClock
from graphcms.core.errors import (
    PolicyViolationError,
    SchemaValidationError,
    StoreError,
    TransitionError,
)
from graphcms.core.ports.store import ListOptions
from graphcms.domain.entities import Content, WorkflowState
from graphcms.domain.query import Query, where_slug
from graphcms.domain.relationships import (
    HasStateProperties,
    RelationshipResult,
    StateTransitionProperties,
)
from graphcms.domain.state import (
    StateTransitionRule,
    TransitionValidation,
    allowed_targets,
    find_state,
    validate_transition,
)
from graphcms.settings.models import WorkflowSettings

from .models import (
    ContentState,
    TransitionInput,
    TransitionOptions,
    TransitionOutput,
    WorkflowValidationError,
)
from .ports import ClockPort, StorePort

logger = logging.getLogger(__name__)


# --- State lookups ---


def _assigned_at(rel: RelationshipResult) -> datetime:
    assigned_at = rel.relationship.properties.assigned_at
    if assigned_at.tzinfo is None:
        return assigned_at.replace(tzinfo=UTC)
    return assigned_at


def _latest(rels: list[RelationshipResult]) -> RelationshipResult:
    """Most recently assigned HAS_STATE edge; naive timestamps are read as UTC."""
    return max(rels, key=_assigned_at)


async def get_all_states(store: StorePort) -> list[WorkflowState]:
    """All states ordered by position."""
    return await store.list(
        "WorkflowState", ListOptions(order_by="position", order_direction="ASC")
    )


async def get_state_by_slug(store: StorePort, slug: str) -> WorkflowState | None:
    states = await store.query("WorkflowState", Query(where=where_slug(slug), limit=1))
    return states[0] if states else None


async def get_content_state(store: StorePort, content_id: str) -> ContentState | None:
    """
    Current state of a content item, or None if it has never been assigned.

    Several HAS_STATE edges can exist after an interrupted transition; the
    most recently assigned one wins.
    """
    rels = await store.get_relationships(
        "Content", content_id, "HAS_STATE", "out", "WorkflowState"
    )
    if not rels:
        return None
    if len(rels) > 1:
        logger.warning(
            "Content %s has %d HAS_STATE edges; using the most recent", content_id, len(rels)
        )
    latest = _latest(rels)
    return ContentState(state=latest.target, properties=latest.relationship.properties)


async def get_allowed_transitions(store: StorePort, current_slug: str) -> TransitionOptions:
    states = await get_all_states(store)
    current = find_state(current_slug, states)
    if current is None:
        return TransitionOptions(current=None, targets=[])
    return TransitionOptions(current=current, targets=allowed_targets(current_slug, states))


async def can_transition_to(store: StorePort, from_slug: str, to_slug: str) -> bool:
    from_state = await get_state_by_slug(store, from_slug)
    if from_state is None:
        return False
    return to_slug in (from_state.allowed_transitions or [])


async def validate_transition_async(
    store: StorePort, content_id: str, new_slug: str
) -> TransitionValidation:
    """
    Check a transition for a stored content item.

    No current state accepts anything; staying in the current state is
    always accepted.
    """
    current = await get_content_state(store, content_id)
    if current is None or current.state.slug == new_slug:
        return TransitionValidation(True)
    states = await get_all_states(store)
    return validate_transition(current.state.slug, new_slug, states)


# --- Transition ---


async def transition_state(
    store: StorePort,
    content_id: str,
    new_state_id: str,
    *,
    assigned_by: str | None = None,
    enforce: bool = True,
    clock: ClockPort | None = None,
    settings: WorkflowSettings | None = None,
) -> WorkflowState:
    """
    Move content to a new state.

    Removes every existing HAS_STATE edge, creates one fresh edge and, when
    the new state is the published state, sets Content.publishedAt.

    Raises:
        TransitionError: enforce is on and the move is not declared.
        StoreError: Any remote failure; earlier steps are not rolled back.
    """
    clock = clock or SystemClock()
    settings = settings or WorkflowSettings()

    new_state = await store.get("WorkflowState", new_state_id)
    rels = await store.get_relationships(
        "Content", content_id, "HAS_STATE", "out", "WorkflowState"
    )

    if enforce and rels:
        current = _latest(rels).target
        if current.slug != new_state.slug:
            result = validate_transition(current.slug, new_state.slug, await get_all_states(store))
            if not result.valid:
                raise TransitionError(result.reason or "Transition not allowed")

    for state_id in dict.fromkeys(rel.target.id for rel in rels):
        try:
            await store.delete_relationship("Content", content_id, "HAS_STATE", state_id)
        except StoreError as e:
            if not e.is_not_found:
                raise
            logger.warning("HAS_STATE edge %s -> %s already deleted; skipping", content_id, state_id)

    now = clock.now_utc()
    await store.create_relationship(
        "Content",
        content_id,
        "HAS_STATE",
        new_state.id,
        HasStateProperties(
            assigned_at=now,
            assigned_by=assigned_by or settings.default_assigned_by,
        ),
    )

    if new_state.slug == settings.published_slug:
        await store.patch("Content", content_id, {"publishedAt": now})

    logger.info("Content %s moved to state %s", content_id, new_state.slug)
    return new_state


# --- Content by state ---


async def get_content_by_state(
    store: StorePort,
    state_slug: str,
    limit: int | None = 100,
    offset: int = 0,
) -> list[Content]:
    """Content currently in a state; limit None returns everything after offset."""
    state = await get_state_by_slug(store, state_slug)
    if state is None:
        return []
    rels = await store.get_relationships("WorkflowState", state.id, "HAS_STATE", "in", "Content")
    end = None if limit is None else offset + limit
    return [r.target for r in rels][offset:end]


async def count_content_by_state(store: StorePort) -> dict[str, int]:
    """Number of content items per state slug."""
    states = await get_all_states(store)
    rels_per_state = await asyncio.gather(
        *(
            store.get_relationships("WorkflowState", s.id, "HAS_STATE", "in", "Content")
            for s in states
        )
    )
    return {s.slug: len(rels) for s, rels in zip(states, rels_per_state)}


async def get_transition_rules_async(store: StorePort) -> list[StateTransitionRule]:
    """Rules from stored STATE_TRANSITION edges, with approval metadata."""
    states = await get_all_states(store)
    rules: list[StateTransitionRule] = []
    for state in states:
        rels = await store.get_relationships(
            "WorkflowState", state.id, "STATE_TRANSITION", "out", "WorkflowState"
        )
        for rel in rels:
            props: StateTransitionProperties = rel.relationship.properties
            rules.append(
                StateTransitionRule(
                    from_state=state.slug,
                    to_state=rel.target.slug,
                    target_slug=rel.target.slug,
                    requires_approval=bool(props.requires_approval),
                    notify_roles=tuple(props.notify_roles or ()),
                )
            )
    return rules


# --- Shell Layer Functions ---


async def run_transition(
    input_data: TransitionInput,
    store: StorePort,
    clock: ClockPort | None = None,
    settings: WorkflowSettings | None = None,
) -> TransitionOutput:
    """Transition content, reporting failures as errors instead of raising."""
    try:
        state = await transition_state(
            store,
            input_data.content_id,
            input_data.new_state_id,
            assigned_by=input_data.assigned_by,
            enforce=input_data.enforce,
            clock=clock,
            settings=settings,
        )
    except TransitionError as e:
        return _failed("TRANSITION_NOT_ALLOWED", e.reason, "new_state_id")
    except StoreError as e:
        code = "NOT_FOUND" if e.is_not_found else "STORE_ERROR"
        return _failed(code, e.message)
    except PolicyViolationError as e:
        return _failed(e.code, str(e))
    except SchemaValidationError as e:
        return _failed("VALIDATION_ERROR", str(e))

    return TransitionOutput(state=state, errors=[], success=True)


def _failed(code: str, message: str, field: str | None = None) -> TransitionOutput:
    return TransitionOutput(
        state=None,
        errors=[WorkflowValidationError(code=code, message=message, field=field)],
        success=False,
    )
