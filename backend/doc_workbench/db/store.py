"""Document and chat persistence on top of SQLite."""

from __future__ import annotations

import sqlite3

from doc_workbench.core.errors import DocumentConflictError, DocumentNotFoundError, SessionNotFoundError
from doc_workbench.core.logging import get_logger
from doc_workbench.db.sqlite import SQLiteDatabase
from doc_workbench.models.entities import ChatMessage, ChatSession, Document, SessionKind
from doc_workbench.utils.ids import new_id
from doc_workbench.utils.text import count_words
from doc_workbench.utils.time import ms_to_datetime, now_ms

logger = get_logger(__name__)

_DOCUMENT_COLUMNS = "id, name, filename, file_type, content, size_bytes, word_count, created_at, updated_at"
_SESSION_COLUMNS = "id, document_id, document_b_id, kind, created_at"


class DocumentStore:
    """CRUD for documents plus per-document chat history.

    ``content`` is replaced wholesale on every update; nothing derived from it
    (chunks, word counts shown to the UI) is stored separately except the
    word count snapshot kept for listing.
    """

    def __init__(self, database: SQLiteDatabase) -> None:
        self.db = database

    # Documents -------------------------------------------------------

    def create_document(
        self,
        name: str,
        content: str,
        filename: str | None = None,
        file_type: str = "text/plain",
    ) -> Document:
        document_id = new_id("doc")
        now = now_ms()
        with self.db.transaction() as cursor:
            cursor.execute(
                f"INSERT INTO documents ({_DOCUMENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                [
                    document_id,
                    name,
                    filename or f"text_input_{now}.txt",
                    file_type,
                    content,
                    len(content.encode("utf-8")),
                    count_words(content),
                    now,
                    now,
                ],
            )
        logger.info("Created document %s", document_id, extra={"ctx_document_id": document_id})
        return self.get_document(document_id)

    def get_document(self, document_id: str) -> Document:
        row = self.db.query_one(f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = ?", [document_id])
        if row is None:
            raise DocumentNotFoundError(document_id)
        return _row_to_document(row)

    def list_documents(self) -> list[Document]:
        rows = self.db.query(f"SELECT {_DOCUMENT_COLUMNS} FROM documents ORDER BY created_at DESC", [])
        return [_row_to_document(row) for row in rows]

    def update_document(self, document_id: str, content: str, expected_content: str | None = None) -> Document:
        """Replace a document's content.

        With ``expected_content`` the write only lands if the stored content is
        still exactly that snapshot; otherwise ``DocumentConflictError``.
        """
        sql = "UPDATE documents SET content = ?, size_bytes = ?, word_count = ?, updated_at = ? WHERE id = ?"
        params: list[object] = [content, len(content.encode("utf-8")), count_words(content), now_ms(), document_id]
        if expected_content is not None:
            sql += " AND content = ?"
            params.append(expected_content)
        with self.db.transaction() as cursor:
            cursor.execute(sql, params)
            if cursor.rowcount == 0:
                cursor.execute("SELECT 1 FROM documents WHERE id = ?", [document_id])
                if cursor.fetchone() is None:
                    raise DocumentNotFoundError(document_id)
                raise DocumentConflictError(document_id)
        logger.info("Updated document %s", document_id, extra={"ctx_document_id": document_id})
        return self.get_document(document_id)

    # Chat ------------------------------------------------------------

    def create_session(
        self,
        document_id: str | None,
        document_b_id: str | None = None,
        kind: SessionKind = "document",
    ) -> ChatSession:
        session_id = new_id("ses")
        now = now_ms()
        with self.db.transaction() as cursor:
            cursor.execute(
                "INSERT INTO chat_sessions (id, document_id, document_b_id, kind, created_at) VALUES (?, ?, ?, ?, ?)",
                [session_id, document_id, document_b_id, kind, now],
            )
        return ChatSession(
            id=session_id,
            document_id=document_id,
            document_b_id=document_b_id,
            created_at=ms_to_datetime(now),
            kind=kind,
        )

    def get_or_create_session(
        self,
        document_id: str | None,
        document_b_id: str | None = None,
        kind: SessionKind = "document",
    ) -> ChatSession:
        existing = self.find_session(document_id, document_b_id, kind)
        if existing is not None:
            return existing
        return self.create_session(document_id, document_b_id, kind)

    def find_session(
        self,
        document_id: str | None,
        document_b_id: str | None = None,
        kind: SessionKind = "document",
    ) -> ChatSession | None:
        row = self.db.query_one(
            f"SELECT {_SESSION_COLUMNS} FROM chat_sessions "
            "WHERE kind = ? AND document_id IS ? AND document_b_id IS ? ORDER BY created_at LIMIT 1",
            [kind, document_id, document_b_id],
        )
        return _row_to_session(row) if row is not None else None

    def get_session(self, session_id: str) -> ChatSession:
        row = self.db.query_one(f"SELECT {_SESSION_COLUMNS} FROM chat_sessions WHERE id = ?", [session_id])
        if row is None:
            raise SessionNotFoundError(session_id)
        return _row_to_session(row)

    def retarget_session(self, session_id: str, document_id: str | None, document_b_id: str | None) -> ChatSession:
        """Point an existing session at a different document pair, keeping its history."""
        with self.db.transaction() as cursor:
            cursor.execute(
                "UPDATE chat_sessions SET document_id = ?, document_b_id = ? WHERE id = ?",
                [document_id, document_b_id, session_id],
            )
            if cursor.rowcount == 0:
                raise SessionNotFoundError(session_id)
        return self.get_session(session_id)

    def add_message(self, session_id: str, role: str, content: str) -> ChatMessage:
        message_id = new_id("msg")
        now = now_ms()
        with self.db.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO chat_messages (id, session_id, role, content, seq, created_at)
                VALUES (?, ?, ?, ?, (SELECT COALESCE(MAX(seq), 0) + 1 FROM chat_messages WHERE session_id = ?), ?)
                """,
                [message_id, session_id, role, content, session_id, now],
            )
        return ChatMessage(
            id=message_id,
            session_id=session_id,
            role=role,
            content=content,
            created_at=ms_to_datetime(now),
        )

    def list_messages(self, session_id: str) -> list[ChatMessage]:
        rows = self.db.query(
            "SELECT id, session_id, role, content, created_at FROM chat_messages WHERE session_id = ? ORDER BY seq",
            [session_id],
        )
        return [
            ChatMessage(
                id=row["id"],
                session_id=row["session_id"],
                role=row["role"],
                content=row["content"],
                created_at=ms_to_datetime(row["created_at"]),
            )
            for row in rows
        ]


def _row_to_document(row: sqlite3.Row) -> Document:
    return Document(
        id=row["id"],
        name=row["name"],
        filename=row["filename"],
        file_type=row["file_type"],
        content=row["content"],
        size_bytes=row["size_bytes"],
        word_count=row["word_count"],
        created_at=ms_to_datetime(row["created_at"]),
        updated_at=ms_to_datetime(row["updated_at"]),
    )


def _row_to_session(row: sqlite3.Row) -> ChatSession:
    return ChatSession(
        id=row["id"],
        document_id=row["document_id"],
        document_b_id=row["document_b_id"],
        created_at=ms_to_datetime(row["created_at"]),
        kind=row["kind"],
    )


__all__ = ["DocumentStore"]
