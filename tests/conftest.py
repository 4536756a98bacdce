import pytest

from graphcms.settings.models import WorkflowSettings
from tests.fakes import FixedClock, InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def workflow_settings() -> WorkflowSettings:
    return WorkflowSettings()


@pytest.fixture
def workflow_states(store: InMemoryStore) -> dict:
    """
    Seed the standard editorial lifecycle.

    draft -> review -> published -> archived, with review able to bounce back
    to draft and archived able to return to draft.
    """
    specs = [
        ("Draft", "draft", 0, ["review"]),
        ("In Review", "review", 1, ["draft", "published"]),
        ("Published", "published", 2, ["archived"]),
        ("Archived", "archived", 3, ["draft"]),
    ]
    states = {}
    for name, slug, position, allowed in specs:
        states[slug] = store.seed(
            "WorkflowState",
            name=name,
            slug=slug,
            color="#888888",
            position=position,
            allowedTransitions=allowed,
        )
    return states
