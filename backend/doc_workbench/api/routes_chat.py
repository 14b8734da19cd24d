"""Chat routes: per document, free-form and two-document comparison."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from doc_workbench.api.dependencies import get_chat_service
from doc_workbench.models.dto import ChatMessageResponse, ChatRequest, CompareRequest
from doc_workbench.services.chat import ChatService

router = APIRouter()
compare_router = APIRouter()


@router.post("/message", response_model=ChatMessageResponse, summary="Chat without a document")
def send_general_message(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatMessageResponse:
    return ChatMessageResponse.from_entity(service.send_general(request.message, request.provider))


@router.get("/messages", response_model=list[ChatMessageResponse], summary="Free-form chat history")
def list_general_messages(service: ChatService = Depends(get_chat_service)) -> list[ChatMessageResponse]:
    return [ChatMessageResponse.from_entity(message) for message in service.general_history()]


@router.post("/{document_id}/message", response_model=ChatMessageResponse, summary="Ask about a document")
def send_message(
    document_id: str,
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatMessageResponse:
    return ChatMessageResponse.from_entity(service.send(document_id, request.message, request.provider))


@router.get("/{document_id}/messages", response_model=list[ChatMessageResponse], summary="Chat history")
def list_messages(document_id: str, service: ChatService = Depends(get_chat_service)) -> list[ChatMessageResponse]:
    return [ChatMessageResponse.from_entity(message) for message in service.history(document_id)]


@compare_router.post("/message", response_model=ChatMessageResponse, summary="Ask about two documents")
def send_compare_message(
    request: CompareRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatMessageResponse:
    message = service.compare(
        request.message,
        request.document_a_id,
        request.document_b_id,
        session_id=request.session_id,
        provider=request.provider,
    )
    return ChatMessageResponse.from_entity(message)


@compare_router.get("/messages/{session_id}", response_model=list[ChatMessageResponse], summary="Comparison history")
def list_compare_messages(session_id: str, service: ChatService = Depends(get_chat_service)) -> list[ChatMessageResponse]:
    return [ChatMessageResponse.from_entity(message) for message in service.session_history(session_id)]


__all__ = ["router", "compare_router"]
