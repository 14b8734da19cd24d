"""Chunking data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Chunk:
    """A word-bounded slice of a document, addressed by ``chunk_index``.

    Indices are only meaningful relative to the content and word budget of
    the pass that produced them.
    """

    id: str
    chunk_index: int
    content: str
    word_count: int
    is_modified: bool = False
    is_editing: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "chunkIndex": self.chunk_index,
            "content": self.content,
            "wordCount": self.word_count,
            "isModified": self.is_modified,
            "isEditing": self.is_editing,
        }


@dataclass(slots=True, frozen=True)
class ChunkedDocument:
    """Output envelope of a chunking pass."""

    original_content: str
    chunks: tuple[Chunk, ...]
    total_word_count: int
    chunk_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalContent": self.original_content,
            "chunks": [chunk.to_dict() for chunk in self.chunks],
            "totalWordCount": self.total_word_count,
            "chunkCount": self.chunk_count,
        }


__all__ = ["Chunk", "ChunkedDocument"]
