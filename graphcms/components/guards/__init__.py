"""
Guards component - Protection of seeded system content.
"""

from .component import ensure_mutable, is_mutable, system_content_response

__all__ = [
    "ensure_mutable",
    "is_mutable",
    "system_content_response",
]
