"""HTTP adapter for the remote graph store."""

from graphcms.adapters.http.entity_client import EntityClient
from graphcms.adapters.http.relationship_client import RelationshipClient
from graphcms.adapters.http.store_client import StoreClient, create_store_client
from graphcms.adapters.http.transport import StoreTransport

__all__ = [
    "EntityClient",
    "RelationshipClient",
    "StoreClient",
    "StoreTransport",
    "create_store_client",
]
