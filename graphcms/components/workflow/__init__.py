"""
Workflow component - Content lifecycle state machine.
"""

from graphcms.domain.state import (
    StateTransitionRule,
    TransitionValidation,
    get_transition_rules,
    validate_transition,
)

from .component import (
    can_transition_to,
    count_content_by_state,
    get_all_states,
    get_allowed_transitions,
    get_content_by_state,
    get_content_state,
    get_state_by_slug,
    get_transition_rules_async,
    run_transition,
    transition_state,
    validate_transition_async,
)
from .models import (
    ContentState,
    TransitionInput,
    TransitionOptions,
    TransitionOutput,
    WorkflowValidationError,
)
from .ports import ClockPort, StorePort

__all__ = [
    # Entry points
    "run_transition",
    # Store-backed operations
    "get_all_states",
    "get_state_by_slug",
    "get_content_state",
    "get_allowed_transitions",
    "can_transition_to",
    "validate_transition_async",
    "transition_state",
    "get_content_by_state",
    "count_content_by_state",
    "get_transition_rules_async",
    # Pure rules
    "validate_transition",
    "get_transition_rules",
    "TransitionValidation",
    "StateTransitionRule",
    # Models
    "ContentState",
    "TransitionOptions",
    "TransitionInput",
    "TransitionOutput",
    "WorkflowValidationError",
    # Ports
    "ClockPort",
    "StorePort",
]
