"""Tests for the document store."""

from __future__ import annotations

from pathlib import Path

import pytest

from doc_workbench.core.errors import DocumentConflictError, DocumentNotFoundError, SessionNotFoundError
from doc_workbench.db.sqlite import SQLiteDatabase
from doc_workbench.db.store import DocumentStore


@pytest.fixture
def store(tmp_path: Path) -> DocumentStore:
    db = SQLiteDatabase(tmp_path / "store.db")
    db.ensure_schema()
    yield DocumentStore(db)
    db.close()


def test_create_and_update_document(store: DocumentStore) -> None:
    created = store.create_document(name="Notes", content="one two three")
    assert created.id.startswith("doc_")
    assert created.word_count == 3
    assert created.size_bytes == len("one two three")
    assert created.filename.startswith("text_input_")

    updated = store.update_document(created.id, "just two")
    assert updated.content == "just two"
    assert updated.word_count == 2
    assert store.get_document(created.id).content == "just two"
    assert [doc.id for doc in store.list_documents()] == [created.id]


def test_missing_document(store: DocumentStore) -> None:
    with pytest.raises(DocumentNotFoundError):
        store.get_document("doc_missing")
    with pytest.raises(DocumentNotFoundError):
        store.update_document("doc_missing", "text")


def test_sessions_and_messages(store: DocumentStore) -> None:
    doc = store.create_document(name="A", content="text")
    other = store.create_document(name="B", content="more text")

    session = store.get_or_create_session(doc.id)
    assert store.get_or_create_session(doc.id).id == session.id
    assert store.get_or_create_session(doc.id, other.id).id != session.id
    assert store.find_session(other.id) is None

    store.add_message(session.id, "user", "hi")
    store.add_message(session.id, "assistant", "hello")
    store.add_message(session.id, "user", "again")
    history = store.list_messages(session.id)
    assert [(m.role, m.content) for m in history] == [("user", "hi"), ("assistant", "hello"), ("user", "again")]
    assert history[0].as_history() == {"role": "user", "content": "hi"}


def test_update_with_expected_content(store: DocumentStore) -> None:
    doc = store.create_document(name="Notes", content="first version")
    assert store.update_document(doc.id, "second", expected_content="first version").content == "second"

    with pytest.raises(DocumentConflictError):
        store.update_document(doc.id, "third", expected_content="first version")
    assert store.get_document(doc.id).content == "second"

    with pytest.raises(DocumentNotFoundError):
        store.update_document("doc_missing", "x", expected_content="second")


def test_session_kinds_are_kept_apart(store: DocumentStore) -> None:
    doc = store.create_document(name="A", content="text")
    comparison = store.create_session(doc.id, None, kind="comparison")
    document_session = store.get_or_create_session(doc.id)
    general = store.get_or_create_session(None, kind="general")

    assert len({comparison.id, document_session.id, general.id}) == 3
    assert store.get_session(comparison.id).kind == "comparison"

    moved = store.retarget_session(comparison.id, None, doc.id)
    assert (moved.document_id, moved.document_b_id) == (None, doc.id)
    with pytest.raises(SessionNotFoundError):
        store.get_session("ses_missing")
