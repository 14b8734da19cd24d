"""Chunk resolution, cross-document synthesis context and reassembly."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from doc_workbench.chunking.chunker import DEFAULT_MAX_WORDS, chunk_document, get_chunk
from doc_workbench.chunking.types import ChunkedDocument
from doc_workbench.core.errors import ChunkingError
from doc_workbench.utils.text import count_words

CHUNK_SEPARATOR = "\n\n"


def resolve_chunk_content(
    content: str,
    indices: Iterable[int],
    max_words: int = DEFAULT_MAX_WORDS,
) -> str:
    """Re-chunk ``content`` and join the requested chunks in caller order.

    Indices are not sorted, so callers can reorder material. An index that
    does not exist in this pass raises ``ChunkIndexError``.
    """
    chunked = chunk_document(content, max_words)
    return join_chunks(chunked, indices)


def join_chunks(chunked: ChunkedDocument, indices: Iterable[int]) -> str:
    return CHUNK_SEPARATOR.join(get_chunk(chunked, index).content for index in indices)


def build_synthesis_context(content_a: str, content_b: str) -> str:
    """Label resolved content from one or two documents for a model prompt."""
    if content_a and content_b:
        return f"Content from Document A:\n{content_a}\n\nContent from Document B:\n{content_b}"
    if content_a or content_b:
        return f"Content to process:\n{content_a or content_b}"
    return ""


def apply_chunk_edit(chunked: ChunkedDocument, chunk_index: int, new_content: str) -> ChunkedDocument:
    """Return a copy of ``chunked`` with one chunk replaced and marked modified.

    The input envelope and every untouched chunk are shared, not copied.
    """
    if not isinstance(new_content, str):
        raise ChunkingError(f"chunk content must be a string, got {type(new_content).__name__}")
    target = get_chunk(chunked, chunk_index)
    edited = replace(
        target,
        content=new_content,
        word_count=count_words(new_content),
        is_modified=True,
    )
    chunks = tuple(edited if chunk.chunk_index == chunk_index else chunk for chunk in chunked.chunks)
    return replace(
        chunked,
        chunks=chunks,
        total_word_count=sum(chunk.word_count for chunk in chunks),
    )


def reassemble(chunked: ChunkedDocument) -> str:
    """Join every chunk in index order; the result becomes the document content."""
    ordered = sorted(chunked.chunks, key=lambda chunk: chunk.chunk_index)
    return CHUNK_SEPARATOR.join(chunk.content for chunk in ordered)


__all__ = [
    "CHUNK_SEPARATOR",
    "resolve_chunk_content",
    "join_chunks",
    "build_synthesis_context",
    "apply_chunk_edit",
    "reassemble",
]
