"""Synthesis of selected chunks from one or two documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from doc_workbench.chunking import build_synthesis_context, resolve_chunk_content
from doc_workbench.core.errors import ChunkingError, ProviderError
from doc_workbench.core.logging import get_logger
from doc_workbench.db.store import DocumentStore
from doc_workbench.llm.providers import ProviderRegistry
from doc_workbench.models.entities import Document
from doc_workbench.utils.text import strip_markup

logger = get_logger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"

SYNTHESIS_PREAMBLE = (
    "You are a professional content synthesizer. Your task is to follow the instructions exactly and "
    "return ONLY the synthesized content with no introductory text, explanatory notes, or metadata.\n\n"
    "Instructions: {instructions}\n\n"
)
SYNTHESIS_CLOSING = (
    "\n\nRemember: Return ONLY the synthesized content. No introductions, explanations, or meta-commentary."
)


@dataclass(slots=True)
class ChunkPair:
    chunk_a_indexes: list[int] = field(default_factory=list)
    chunk_b_indexes: list[int] = field(default_factory=list)
    instructions: str = ""


@dataclass(slots=True)
class SynthesisResult:
    sections: list[str]
    provider: str
    used_chat_data: bool

    @property
    def content(self) -> str:
        return SECTION_SEPARATOR.join(self.sections)


class SynthesisService:
    def __init__(self, store: DocumentStore, providers: ProviderRegistry, max_words: int) -> None:
        self.store = store
        self.providers = providers
        self.max_words = max_words

    def synthesize(
        self,
        pairs: Sequence[ChunkPair],
        document_a_id: str | None = None,
        document_b_id: str | None = None,
        provider: str | None = None,
        use_chat_data: bool = False,
        session_id: str | None = None,
    ) -> SynthesisResult:
        if not pairs:
            raise ChunkingError("at least one chunk pair is required")
        backend = self.providers.get(provider)
        document_a = self.store.get_document(document_a_id) if document_a_id else None
        document_b = self.store.get_document(document_b_id) if document_b_id else None
        chat_context = self._chat_context(session_id) if use_chat_data and session_id else ""

        sections: list[str] = []
        for position, pair in enumerate(pairs):
            context = self.build_context(pair, document_a, document_b)
            prompt = SYNTHESIS_PREAMBLE.format(instructions=pair.instructions) + context
            if chat_context:
                prompt += f"\n\nRelevant conversation context:\n{chat_context}"
            prompt += SYNTHESIS_CLOSING
            response = backend.generate(prompt, "", [])
            if not response.ok:
                raise ProviderError(backend.name, response.error or "unknown error")
            logger.debug("Synthesized section %s", position, extra={"ctx_provider": backend.name})
            sections.append(strip_markup(response.message))

        return SynthesisResult(sections=sections, provider=backend.name, used_chat_data=bool(chat_context))

    def build_context(self, pair: ChunkPair, document_a: Document | None, document_b: Document | None) -> str:
        """Resolve a pair's chunk references into the labelled context block."""
        content_a = self._resolve(document_a, pair.chunk_a_indexes, "A")
        content_b = self._resolve(document_b, pair.chunk_b_indexes, "B")
        context = build_synthesis_context(content_a, content_b)
        if not context:
            raise ChunkingError("chunk pair selects no content")
        return context

    def _resolve(self, document: Document | None, indexes: Sequence[int], label: str) -> str:
        if not indexes:
            return ""
        if document is None:
            raise ChunkingError(f"chunk indexes given for document {label} but no document {label} selected")
        return resolve_chunk_content(document.content, indexes, self.max_words)

    def _chat_context(self, session_id: str) -> str:
        return "\n\n".join(f"{msg.role}: {msg.content}" for msg in self.store.list_messages(session_id))


__all__ = ["ChunkPair", "SynthesisResult", "SynthesisService", "SECTION_SEPARATOR"]
