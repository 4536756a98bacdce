"""
graphcms - content domain layer over a remote graph store.

Turns a schema-less entity/relationship HTTP API into a validated content
model: typed entity client, query/traversal algebra, relationship
operations, workflow state machine, rich-text block conversion and
revision history.
"""

__version__ = "0.3.0"
