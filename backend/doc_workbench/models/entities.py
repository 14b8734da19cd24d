"""Internal dataclasses representing persisted entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

SessionKind = Literal["document", "comparison", "general"]


@dataclass(slots=True)
class Document:
    id: str
    name: str
    filename: str
    file_type: str
    content: str
    size_bytes: int
    word_count: int
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class ChatSession:
    id: str
    document_id: str | None
    document_b_id: str | None
    created_at: datetime
    kind: SessionKind = "document"


@dataclass(slots=True)
class ChatMessage:
    id: str
    session_id: str
    role: str
    content: str
    created_at: datetime

    def as_history(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}
