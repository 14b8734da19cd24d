"""Chat with persisted history: per document, across a document pair, or free-form."""

from __future__ import annotations

from doc_workbench.core.errors import ProviderError
from doc_workbench.db.store import DocumentStore
from doc_workbench.llm.providers import ProviderRegistry
from doc_workbench.models.entities import ChatMessage, ChatSession
from doc_workbench.utils.text import strip_markup


class ChatService:
    def __init__(self, store: DocumentStore, providers: ProviderRegistry, context_chars: int) -> None:
        self.store = store
        self.providers = providers
        self.context_chars = context_chars

    def send(self, document_id: str, message: str, provider: str | None = None) -> ChatMessage:
        """Answer ``message`` about a document; both turns are stored on success."""
        document = self.store.get_document(document_id)
        session = self.store.get_or_create_session(document.id)
        return self._exchange(session, message, self.document_context(document.content), provider)

    def send_general(self, message: str, provider: str | None = None) -> ChatMessage:
        session = self.store.get_or_create_session(None, kind="general")
        return self._exchange(session, message, "", provider)

    def compare(
        self,
        message: str,
        document_a_id: str | None,
        document_b_id: str | None,
        session_id: str | None = None,
        provider: str | None = None,
    ) -> ChatMessage:
        """Ask about two documents side by side.

        An existing ``session_id`` keeps its history and is re-pointed at the
        given pair if the selection changed; otherwise a new comparison
        session is opened.
        """
        document_a = self.store.get_document(document_a_id) if document_a_id else None
        document_b = self.store.get_document(document_b_id) if document_b_id else None

        if session_id:
            session = self.store.get_session(session_id)
            if (session.document_id, session.document_b_id) != (document_a_id, document_b_id):
                session = self.store.retarget_session(session.id, document_a_id, document_b_id)
        else:
            session = self.store.create_session(document_a_id, document_b_id, kind="comparison")

        budget = self.context_chars // 2
        sections = []
        if document_a is not None:
            sections.append(f"Document A:\n{self.document_context(document_a.content, budget, 'Document A')}")
        if document_b is not None:
            sections.append(f"Document B:\n{self.document_context(document_b.content, budget, 'Document B')}")
        return self._exchange(session, message, "\n\n".join(sections), provider)

    def history(self, document_id: str) -> list[ChatMessage]:
        self.store.get_document(document_id)
        session = self.store.find_session(document_id)
        return self.store.list_messages(session.id) if session else []

    def general_history(self) -> list[ChatMessage]:
        session = self.store.find_session(None, kind="general")
        return self.store.list_messages(session.id) if session else []

    def session_history(self, session_id: str) -> list[ChatMessage]:
        return self.store.list_messages(self.store.get_session(session_id).id)

    def document_context(self, content: str, limit: int | None = None, label: str = "Document") -> str:
        limit = self.context_chars if limit is None else limit
        if len(content) <= limit:
            return content
        return (
            content[:limit]
            + f"\n\n[Note: {label} is {len(content)} characters. Only first {limit} "
            "characters shown. For specific sections, ask about particular topics or use the chunked view.]"
        )

    def _exchange(self, session: ChatSession, message: str, context: str, provider: str | None) -> ChatMessage:
        backend = self.providers.get(provider)
        history = [item.as_history() for item in self.store.list_messages(session.id)]
        response = backend.generate(message, context, history)
        if not response.ok:
            raise ProviderError(backend.name, response.error or "unknown error")

        self.store.add_message(session.id, "user", message)
        return self.store.add_message(session.id, "assistant", strip_markup(response.message))


__all__ = ["ChatService"]
