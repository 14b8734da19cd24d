"""Document chunking and reassembly."""

from .types import Chunk, ChunkedDocument
from .chunker import DEFAULT_MAX_WORDS, chunk_document, chunk_stats, get_chunk, needs_virtualization
from .synthesis import apply_chunk_edit, build_synthesis_context, reassemble, resolve_chunk_content

__all__ = [
    "Chunk",
    "ChunkedDocument",
    "DEFAULT_MAX_WORDS",
    "chunk_document",
    "chunk_stats",
    "get_chunk",
    "needs_virtualization",
    "apply_chunk_edit",
    "build_synthesis_context",
    "reassemble",
    "resolve_chunk_content",
]
