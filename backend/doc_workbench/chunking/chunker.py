"""Word-budget chunking of document text."""

from __future__ import annotations

from typing import Any, Iterator, Sequence

from doc_workbench.chunking.types import Chunk, ChunkedDocument
from doc_workbench.core.errors import ChunkIndexError, ChunkingError
from doc_workbench.utils.ids import chunk_id
from doc_workbench.utils.text import count_words, words

DEFAULT_MAX_WORDS = 1000

# Display hints only; chunking itself always uses the caller's budget.
VIRTUALIZE_WORD_THRESHOLD = 2000
VIRTUALIZE_BYTE_THRESHOLD = 50 * 1024

_PREVIEW_CHARS = 100


def chunk_document(content: str, max_words: int = DEFAULT_MAX_WORDS) -> ChunkedDocument:
    """Split ``content`` into chunks of at most ``max_words`` words.

    A document within budget comes back as a single chunk holding the
    stripped original text, formatting intact. Larger documents are cut into
    consecutive groups of ``max_words`` words, and each group is rejoined with
    single spaces: line breaks inside a multi-chunk document are not
    preserved. Empty content yields one empty chunk.
    """
    _validate(content, max_words)
    tokens = words(content)
    total = len(tokens)

    if total <= max_words:
        chunks: tuple[Chunk, ...] = (
            Chunk(id=chunk_id(0), chunk_index=0, content=content.strip(), word_count=total),
        )
    else:
        chunks = tuple(
            Chunk(
                id=chunk_id(index),
                chunk_index=index,
                content=" ".join(group),
                word_count=len(group),
            )
            for index, group in enumerate(_word_groups(tokens, max_words))
        )

    return ChunkedDocument(
        original_content=content,
        chunks=chunks,
        total_word_count=total,
        chunk_count=len(chunks),
    )


def get_chunk(chunked: ChunkedDocument, index: int) -> Chunk:
    """Look up a chunk by index, raising ``ChunkIndexError`` when absent."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise ChunkingError(f"chunk index must be an integer, got {index!r}")
    if not 0 <= index < chunked.chunk_count:
        raise ChunkIndexError(index, chunked.chunk_count)
    return chunked.chunks[index]


def chunk_stats(chunked: ChunkedDocument) -> dict[str, Any]:
    return {
        "totalChunks": chunked.chunk_count,
        "totalWords": chunked.total_word_count,
        "avgWordsPerChunk": round(chunked.total_word_count / chunked.chunk_count),
        "chunks": [
            {
                "index": chunk.chunk_index,
                "words": chunk.word_count,
                "preview": _preview(chunk.content),
            }
            for chunk in chunked.chunks
        ],
    }


def needs_virtualization(content: str) -> bool:
    """Whether a document is large enough to need windowed rendering."""
    if count_words(content) > VIRTUALIZE_WORD_THRESHOLD:
        return True
    return len(content.encode("utf-8")) > VIRTUALIZE_BYTE_THRESHOLD


def _validate(content: Any, max_words: Any) -> None:
    if not isinstance(content, str):
        raise ChunkingError(f"content must be a string, got {type(content).__name__}")
    if isinstance(max_words, bool) or not isinstance(max_words, int):
        raise ChunkingError(f"max_words must be an integer, got {max_words!r}")
    if max_words <= 0:
        raise ChunkingError(f"max_words must be positive, got {max_words}")


def _word_groups(tokens: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    for start in range(0, len(tokens), size):
        yield tokens[start : start + size]


def _preview(text: str) -> str:
    if len(text) > _PREVIEW_CHARS:
        return text[:_PREVIEW_CHARS] + "..."
    return text


__all__ = [
    "DEFAULT_MAX_WORDS",
    "chunk_document",
    "get_chunk",
    "chunk_stats",
    "needs_virtualization",
]
