"""Document lifecycle and chunk-level editing."""

from __future__ import annotations

from dataclasses import dataclass

from doc_workbench.chunking import ChunkedDocument, apply_chunk_edit, chunk_document, reassemble
from doc_workbench.core.config import Settings
from doc_workbench.core.logging import get_logger
from doc_workbench.core.metrics import CHUNKS_PER_DOCUMENT
from doc_workbench.db.store import DocumentStore
from doc_workbench.models.entities import Document

logger = get_logger(__name__)


@dataclass(slots=True)
class ChunkEdit:
    """A persisted document together with the chunk view that produced it."""

    document: Document
    chunked: ChunkedDocument


class DocumentService:
    def __init__(self, store: DocumentStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    @property
    def max_words(self) -> int:
        return self.settings.chunk_max_words

    def create_from_text(self, title: str, content: str) -> Document:
        return self.store.create_document(name=title, content=content)

    def chunks(self, document_id: str) -> ChunkedDocument:
        return self.chunk_view(self.store.get_document(document_id))

    def chunk_view(self, document: Document) -> ChunkedDocument:
        chunked = chunk_document(document.content, self.max_words)
        CHUNKS_PER_DOCUMENT.observe(chunked.chunk_count)
        return chunked

    def edit_chunk(
        self,
        document_id: str,
        chunk_index: int,
        new_content: str,
        snapshot: Document | None = None,
    ) -> ChunkEdit:
        """Replace one chunk and persist the reassembled content.

        ``chunk_index`` is interpreted against ``snapshot`` (the stored
        document when omitted). The write is rejected with
        ``DocumentConflictError`` if the stored content no longer matches
        that snapshot.
        """
        document = snapshot if snapshot is not None else self.store.get_document(document_id)
        chunked = apply_chunk_edit(self.chunk_view(document), chunk_index, new_content)
        updated = self.store.update_document(document_id, reassemble(chunked), expected_content=document.content)
        logger.info(
            "Applied edit to chunk %s of %s",
            chunk_index,
            document_id,
            extra={"ctx_document_id": document_id, "ctx_chunk_index": chunk_index},
        )
        return ChunkEdit(document=updated, chunked=chunked)


__all__ = ["ChunkEdit", "DocumentService"]
