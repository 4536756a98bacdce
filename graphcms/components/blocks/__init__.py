"""
Blocks component - Rich text documents stored as positioned ContentBlocks.
"""

from ._impl import (
    block_to_node,
    blocks_to_document,
    document_to_blocks,
    extract_text,
    node_to_block_content,
)
from .component import (
    delete_content_blocks,
    get_block_author,
    get_block_embedded_content,
    get_block_media,
    get_content_blocks,
    load_content_as_document,
    load_content_blocks,
    run_save_blocks,
    save_content_blocks,
)
from .models import (
    BlocksValidationError,
    DocNode,
    Document,
    SaveBlocksInput,
    SaveBlocksOutput,
)

__all__ = [
    # Entry points
    "run_save_blocks",
    # Converter
    "document_to_blocks",
    "blocks_to_document",
    "extract_text",
    "node_to_block_content",
    "block_to_node",
    # Persistence
    "save_content_blocks",
    "load_content_blocks",
    "load_content_as_document",
    "delete_content_blocks",
    "get_content_blocks",
    "get_block_media",
    "get_block_author",
    "get_block_embedded_content",
    # Models
    "DocNode",
    "Document",
    "SaveBlocksInput",
    "SaveBlocksOutput",
    "BlocksValidationError",
]
