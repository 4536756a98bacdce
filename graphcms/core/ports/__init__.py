# Port interfaces; implementations live in graphcms.adapters

from graphcms.core.ports.store import EntityRef, ListOptions, PagedResult, Pagination, StorePort

__all__ = [
    "EntityRef",
    "ListOptions",
    "PagedResult",
    "Pagination",
    "StorePort",
]
