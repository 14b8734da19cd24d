"""Rewrite and synthesis routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from doc_workbench.api.dependencies import get_rewrite_service, get_synthesis_service
from doc_workbench.models.dto import (
    RewriteChunkRequest,
    RewriteChunkResponse,
    SynthesizeRequest,
    SynthesizeResponse,
)
from doc_workbench.services.rewrite import RewriteService
from doc_workbench.services.synthesis import ChunkPair, SynthesisService

router = APIRouter()


@router.post("/rewrite-chunk", response_model=RewriteChunkResponse, summary="Rewrite a block of text")
def rewrite_chunk(
    request: RewriteChunkRequest,
    service: RewriteService = Depends(get_rewrite_service),
) -> RewriteChunkResponse:
    rewritten = service.rewrite_text(request.chunk_text, request.instructions, request.provider)
    return RewriteChunkResponse(rewritten_text=rewritten)


@router.post(
    "/documents/synthesize",
    response_model=SynthesizeResponse,
    summary="Synthesize selected chunks from one or two documents",
)
def synthesize(
    request: SynthesizeRequest,
    service: SynthesisService = Depends(get_synthesis_service),
) -> SynthesizeResponse:
    pairs = [
        ChunkPair(
            chunk_a_indexes=list(pair.chunk_a_indexes),
            chunk_b_indexes=list(pair.chunk_b_indexes),
            instructions=pair.instructions,
        )
        for pair in request.chunk_pairs
    ]
    result = service.synthesize(
        pairs,
        document_a_id=request.document_a_id,
        document_b_id=request.document_b_id,
        provider=request.provider,
        use_chat_data=request.use_chat_data,
        session_id=request.session_id,
    )
    return SynthesizeResponse(
        synthesized_content=result.content,
        sections=result.sections,
        provider=result.provider,
        used_chat_data=result.used_chat_data,
    )


__all__ = ["router"]
