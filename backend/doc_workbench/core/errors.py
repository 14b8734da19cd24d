"""Exception hierarchy shared by the core and the HTTP layer."""

from __future__ import annotations


class WorkbenchError(Exception):
    """Base class for errors raised by Doc Workbench components."""


class ChunkingError(WorkbenchError, ValueError):
    """Raised when chunker input has the wrong shape."""


class ChunkIndexError(WorkbenchError, IndexError):
    """Raised when a chunk index does not exist in a chunking pass."""

    def __init__(self, index: int, chunk_count: int) -> None:
        super().__init__(f"Chunk index {index} out of range for {chunk_count} chunk(s)")
        self.index = index
        self.chunk_count = chunk_count


class DocumentNotFoundError(WorkbenchError, LookupError):
    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class DocumentConflictError(WorkbenchError):
    """Raised when stored content changed after a chunk view was taken from it."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document {document_id} changed since its chunks were read")
        self.document_id = document_id


class SessionNotFoundError(WorkbenchError, LookupError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Chat session {session_id} not found")
        self.session_id = session_id


class UnknownProviderError(WorkbenchError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown provider: {name}")
        self.name = name


class ProviderError(WorkbenchError):
    """Raised by callers when a provider reports a failed generation."""

    def __init__(self, provider: str, detail: str) -> None:
        super().__init__(f"{provider} request failed: {detail}")
        self.provider = provider
        self.detail = detail


__all__ = [
    "WorkbenchError",
    "ChunkingError",
    "ChunkIndexError",
    "DocumentNotFoundError",
    "DocumentConflictError",
    "SessionNotFoundError",
    "UnknownProviderError",
    "ProviderError",
]
