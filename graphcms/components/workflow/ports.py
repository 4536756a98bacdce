"""
Workflow component - Port interfaces.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from graphcms.core.ports.store import StorePort


class ClockPort(Protocol):
    """Protocol for time operations."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...


__all__ = ["ClockPort", "StorePort"]
