"""Document and chunk routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from doc_workbench.api.dependencies import get_document_service, get_rewrite_service
from doc_workbench.chunking import chunk_stats
from doc_workbench.models.dto import (
    ChunkEditRequest,
    ChunkEditResponse,
    ChunkResponse,
    ChunkStatsResponse,
    DocumentChunkRewriteRequest,
    DocumentCreateRequest,
    DocumentResponse,
    DocumentUpdateRequest,
)
from doc_workbench.services.documents import ChunkEdit, DocumentService
from doc_workbench.services.rewrite import RewriteService

router = APIRouter()


@router.post("/from-text", response_model=DocumentResponse, summary="Create a document from text")
def create_from_text(
    request: DocumentCreateRequest,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = service.create_from_text(request.title, request.content)
    return DocumentResponse.from_entity(document, service.max_words)


@router.get("", response_model=list[DocumentResponse], summary="List documents")
def list_documents(service: DocumentService = Depends(get_document_service)) -> list[DocumentResponse]:
    return [DocumentResponse.from_entity(doc, service.max_words) for doc in service.store.list_documents()]


@router.get("/{document_id}", response_model=DocumentResponse, summary="Fetch one document")
def get_document(document_id: str, service: DocumentService = Depends(get_document_service)) -> DocumentResponse:
    return DocumentResponse.from_entity(service.store.get_document(document_id), service.max_words)


@router.put("/{document_id}", response_model=DocumentResponse, summary="Replace document content")
def update_document(
    document_id: str,
    request: DocumentUpdateRequest,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = service.store.update_document(document_id, request.content)
    return DocumentResponse.from_entity(document, service.max_words)


@router.get("/{document_id}/chunks", response_model=list[ChunkResponse], summary="Chunk a document")
def list_chunks(document_id: str, service: DocumentService = Depends(get_document_service)) -> list[ChunkResponse]:
    return [ChunkResponse.from_chunk(chunk) for chunk in service.chunks(document_id).chunks]


@router.get("/{document_id}/chunks/stats", response_model=ChunkStatsResponse, summary="Chunk statistics")
def get_chunk_stats(document_id: str, service: DocumentService = Depends(get_document_service)) -> ChunkStatsResponse:
    return ChunkStatsResponse(**chunk_stats(service.chunks(document_id)))


@router.put(
    "/{document_id}/chunks/{chunk_index}",
    response_model=ChunkEditResponse,
    summary="Replace one chunk and save the rejoined document",
)
def edit_chunk(
    document_id: str,
    chunk_index: int,
    request: ChunkEditRequest,
    service: DocumentService = Depends(get_document_service),
) -> ChunkEditResponse:
    return _edit_response(service.edit_chunk(document_id, chunk_index, request.content), service.max_words)


@router.post(
    "/{document_id}/chunks/{chunk_index}/rewrite",
    response_model=ChunkEditResponse,
    summary="Rewrite one chunk with a language model and save it",
)
def rewrite_chunk_in_place(
    document_id: str,
    chunk_index: int,
    request: DocumentChunkRewriteRequest,
    service: RewriteService = Depends(get_rewrite_service),
) -> ChunkEditResponse:
    edit = service.rewrite_document_chunk(document_id, chunk_index, request.instructions, request.provider)
    return _edit_response(edit, service.documents.max_words)


def _edit_response(edit: ChunkEdit, max_words: int) -> ChunkEditResponse:
    return ChunkEditResponse(
        document=DocumentResponse.from_entity(edit.document, max_words),
        chunks=[ChunkResponse.from_chunk(chunk) for chunk in edit.chunked.chunks],
    )


__all__ = ["router"]
