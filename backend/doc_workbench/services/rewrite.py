"""AI rewriting of chunk text."""

from __future__ import annotations

from doc_workbench.chunking import get_chunk
from doc_workbench.core.errors import ProviderError
from doc_workbench.llm.providers import ProviderRegistry
from doc_workbench.services.documents import ChunkEdit, DocumentService
from doc_workbench.utils.text import strip_markup

REWRITE_PROMPT = """You are tasked with rewriting the following text according to the user's instructions. \
Follow the instructions precisely while maintaining the original meaning and important information.

User Instructions: {instructions}

Original Text:
\"\"\"
{text}
\"\"\"

Please rewrite the text according to the instructions. Return only the rewritten text without any \
explanations, quotation marks, or markdown formatting."""


class RewriteService:
    def __init__(self, documents: DocumentService, providers: ProviderRegistry) -> None:
        self.documents = documents
        self.providers = providers

    def rewrite_text(self, text: str, instructions: str, provider: str | None = None) -> str:
        """Send ``text`` through the provider and return the cleaned rewrite."""
        backend = self.providers.get(provider)
        response = backend.generate(REWRITE_PROMPT.format(instructions=instructions, text=text), "", [])
        if not response.ok:
            raise ProviderError(backend.name, response.error or "unknown error")
        return strip_markup(response.message)

    def rewrite_document_chunk(
        self,
        document_id: str,
        chunk_index: int,
        instructions: str,
        provider: str | None = None,
    ) -> ChunkEdit:
        """Rewrite one stored chunk and save it back into the content it was read from."""
        snapshot = self.documents.store.get_document(document_id)
        chunk = get_chunk(self.documents.chunk_view(snapshot), chunk_index)
        rewritten = self.rewrite_text(chunk.content, instructions, provider)
        return self.documents.edit_chunk(document_id, chunk_index, rewritten, snapshot=snapshot)


__all__ = ["RewriteService", "REWRITE_PROMPT"]
