"""
Error taxonomy for the content layer.

- SchemaValidationError: malformed entity / relationship data, raised locally
  before any request is issued.
- StoreError: any non-success response (or missing response) from the store.
- PolicyViolationError: a rule such as "system content is read-only" was hit.
- TransitionError: a workflow transition was rejected.
- ConfigError: required configuration is missing or invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class CmsError(Exception):
    """Base content layer error."""

    pass


# --- Validation ---


@dataclass(frozen=True)
class SchemaIssue:
    """Single validation problem."""

    loc: str
    msg: str


class SchemaValidationError(CmsError):
    """Data does not conform to a registered schema."""

    def __init__(self, schema_name: str, issues: list[SchemaIssue]) -> None:
        self.schema_name = schema_name
        self.issues = issues
        summary = "; ".join(f"{i.loc}: {i.msg}" if i.loc else i.msg for i in issues)
        super().__init__(f"Invalid {schema_name}: {summary}")

    @classmethod
    def from_pydantic(cls, schema_name: str, exc: Any, prefix: str = "") -> SchemaValidationError:
        """Build from a pydantic ValidationError."""
        issues = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            if prefix:
                loc = f"{prefix}.{loc}" if loc else prefix
            issues.append(SchemaIssue(loc=loc, msg=err.get("msg", "invalid")))
        return cls(schema_name, issues)


class QueryValidationError(SchemaValidationError):
    """Query or traversal request failed registry checks."""

    def __init__(self, entity: str, path: str, msg: str) -> None:
        self.path = path
        super().__init__(f"{entity} query", [SchemaIssue(loc=path, msg=msg)])


# --- Remote ---


class StoreError(CmsError):
    """
    Remote store failure.

    status_code is the HTTP status, or 0 when no response was received.
    """

    def __init__(self, message: str, status_code: int, details: Any = None) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def __repr__(self) -> str:
        return f"StoreError(status_code={self.status_code}, message={self.message!r})"


# --- Policy ---


class PolicyViolationError(CmsError):
    """Operation rejected by a local policy."""

    status_code = 403
    code = "POLICY_VIOLATION"


class SystemContentError(PolicyViolationError):
    """Attempt to modify seed/demo content flagged isSystem."""

    code = "SYSTEM_CONTENT_PROTECTED"

    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        super().__init__(system_content_message(entity_type))


def system_content_message(entity_type: str) -> str:
    return (
        f"Demo {entity_type.lower()} cannot be modified. "
        "Please create new content to test editing."
    )


# --- Workflow ---


class TransitionError(CmsError):
    """Workflow transition rejected."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


# --- Configuration ---


class ConfigError(CmsError):
    """Configuration missing or invalid."""

    pass
