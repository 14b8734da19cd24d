"""Pydantic DTOs exposed via API."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from doc_workbench.chunking import Chunk, needs_virtualization
from doc_workbench.models.entities import ChatMessage, Document


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentCreateRequest(ApiModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class DocumentUpdateRequest(ApiModel):
    content: str = Field(min_length=1)


class DocumentResponse(ApiModel):
    id: str
    name: str
    filename: str
    file_type: str
    content: str
    size_bytes: int
    word_count: int
    is_chunked: bool
    chunk_count: int
    needs_virtualization: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, document: Document, max_words: int) -> "DocumentResponse":
        is_chunked = document.word_count > max_words
        return cls(
            id=document.id,
            name=document.name,
            filename=document.filename,
            file_type=document.file_type,
            content=document.content,
            size_bytes=document.size_bytes,
            word_count=document.word_count,
            is_chunked=is_chunked,
            chunk_count=math.ceil(document.word_count / max_words) if is_chunked else 1,
            needs_virtualization=needs_virtualization(document.content),
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class ChunkResponse(ApiModel):
    id: str
    chunk_index: int
    content: str
    word_count: int
    is_modified: bool = False
    is_editing: bool = False

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> "ChunkResponse":
        return cls(
            id=chunk.id,
            chunk_index=chunk.chunk_index,
            content=chunk.content,
            word_count=chunk.word_count,
            is_modified=chunk.is_modified,
            is_editing=chunk.is_editing,
        )


class ChunkEditRequest(ApiModel):
    content: str


class ChunkEditResponse(ApiModel):
    document: DocumentResponse
    chunks: list[ChunkResponse]


class ChunkStatsResponse(ApiModel):
    total_chunks: int
    total_words: int
    avg_words_per_chunk: int
    chunks: list[dict[str, Any]]


class RewriteChunkRequest(ApiModel):
    chunk_text: str = Field(min_length=1)
    instructions: str = Field(min_length=1)
    provider: str | None = None


class RewriteChunkResponse(ApiModel):
    rewritten_text: str


class DocumentChunkRewriteRequest(ApiModel):
    instructions: str = Field(min_length=1)
    provider: str | None = None


class ChunkPairRequest(ApiModel):
    chunk_a_indexes: list[int] = Field(default_factory=list)
    chunk_b_indexes: list[int] = Field(default_factory=list)
    instructions: str = Field(min_length=1)


class SynthesizeRequest(ApiModel):
    chunk_pairs: list[ChunkPairRequest] = Field(default_factory=list)
    document_a_id: str | None = None
    document_b_id: str | None = None
    provider: str | None = None
    use_chat_data: bool = False
    session_id: str | None = None


class SynthesizeResponse(ApiModel):
    synthesized_content: str
    sections: list[str]
    provider: str
    used_chat_data: bool


class ChatRequest(ApiModel):
    message: str = Field(min_length=1)
    provider: str | None = None


class CompareRequest(ChatRequest):
    document_a_id: str | None = None
    document_b_id: str | None = None
    session_id: str | None = None


class ChatMessageResponse(ApiModel):
    id: str
    session_id: str
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(
            id=message.id,
            session_id=message.session_id,
            role=message.role,
            content=message.content,
            created_at=message.created_at,
        )


__all__ = [
    "DocumentCreateRequest",
    "DocumentUpdateRequest",
    "DocumentResponse",
    "ChunkResponse",
    "ChunkEditRequest",
    "ChunkEditResponse",
    "ChunkStatsResponse",
    "RewriteChunkRequest",
    "RewriteChunkResponse",
    "DocumentChunkRewriteRequest",
    "ChunkPairRequest",
    "SynthesizeRequest",
    "SynthesizeResponse",
    "ChatRequest",
    "CompareRequest",
    "ChatMessageResponse",
]
