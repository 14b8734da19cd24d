"""Tests for chunk resolution, editing and reassembly."""

from __future__ import annotations

import pytest

from doc_workbench.chunking import (
    apply_chunk_edit,
    build_synthesis_context,
    chunk_document,
    reassemble,
    resolve_chunk_content,
)
from doc_workbench.core.errors import ChunkIndexError, ChunkingError


@pytest.fixture
def three_chunk_text(make_words) -> str:
    return " ".join(make_words(25))


def test_resolution_preserves_caller_order(three_chunk_text: str) -> None:
    chunked = chunk_document(three_chunk_text, 10)
    contents = [chunk.content for chunk in chunked.chunks]
    resolved = resolve_chunk_content(three_chunk_text, [2, 0, 1], max_words=10)
    assert resolved == "\n\n".join([contents[2], contents[0], contents[1]])


def test_resolution_allows_repeats(three_chunk_text: str) -> None:
    resolved = resolve_chunk_content(three_chunk_text, [1, 1], max_words=10)
    first, second = resolved.split("\n\n")
    assert first == second


def test_resolution_uses_default_budget(make_words) -> None:
    text = " ".join(make_words(1500))
    assert resolve_chunk_content(text, [1]).split()[0] == "w1000"


def test_resolution_rejects_stale_index(three_chunk_text: str) -> None:
    with pytest.raises(ChunkIndexError) as excinfo:
        resolve_chunk_content(three_chunk_text, [0, 3], max_words=10)
    assert excinfo.value.index == 3
    assert excinfo.value.chunk_count == 3


def test_empty_index_list_resolves_to_empty(three_chunk_text: str) -> None:
    assert resolve_chunk_content(three_chunk_text, [], max_words=10) == ""


def test_two_document_context_labels() -> None:
    context = build_synthesis_context("alpha", "beta")
    assert context == "Content from Document A:\nalpha\n\nContent from Document B:\nbeta"


def test_single_document_context() -> None:
    assert build_synthesis_context("alpha", "") == "Content to process:\nalpha"
    assert build_synthesis_context("", "beta") == "Content to process:\nbeta"
    assert build_synthesis_context("", "") == ""


def test_two_document_example(make_words) -> None:
    doc_a = " ".join(make_words(1500, prefix="a"))
    doc_b = " ".join(make_words(2500, prefix="b"))
    chunks_a = chunk_document(doc_a, 1000).chunks
    chunks_b = chunk_document(doc_b, 1000).chunks
    assert (len(chunks_a), len(chunks_b)) == (2, 3)

    context = build_synthesis_context(
        resolve_chunk_content(doc_a, [1]),
        resolve_chunk_content(doc_b, [0, 2]),
    )
    expected = (
        f"Content from Document A:\n{chunks_a[1].content}\n\n"
        f"Content from Document B:\n{chunks_b[0].content}\n\n{chunks_b[2].content}"
    )
    assert context == expected


def test_edit_isolation(three_chunk_text: str) -> None:
    chunked = chunk_document(three_chunk_text, 10)
    edited = apply_chunk_edit(chunked, 1, "replacement text")

    assert edited is not chunked
    assert edited.chunks[0] is chunked.chunks[0]
    assert edited.chunks[2] is chunked.chunks[2]
    assert edited.chunks[1].content == "replacement text"
    assert edited.chunks[1].word_count == 2
    assert edited.chunks[1].id == chunked.chunks[1].id
    assert [c.is_modified for c in edited.chunks] == [False, True, False]
    assert edited.total_word_count == 10 + 2 + 5
    assert edited.chunk_count == 3

    # the original envelope is untouched
    assert chunked.chunks[1].is_modified is False
    assert chunked.total_word_count == 25


def test_modified_flag_is_sticky(three_chunk_text: str) -> None:
    chunked = chunk_document(three_chunk_text, 10)
    once = apply_chunk_edit(chunked, 0, "first")
    twice = apply_chunk_edit(once, 0, chunked.chunks[0].content)
    assert twice.chunks[0].is_modified is True


def test_edit_out_of_range(three_chunk_text: str) -> None:
    chunked = chunk_document(three_chunk_text, 10)
    with pytest.raises(ChunkIndexError):
        apply_chunk_edit(chunked, 5, "nope")


def test_edit_requires_string(three_chunk_text: str) -> None:
    chunked = chunk_document(three_chunk_text, 10)
    with pytest.raises(ChunkingError):
        apply_chunk_edit(chunked, 0, None)  # type: ignore[arg-type]


def test_reassemble_joins_in_index_order(three_chunk_text: str) -> None:
    chunked = apply_chunk_edit(chunk_document(three_chunk_text, 10), 2, "tail")
    rebuilt = reassemble(chunked)
    parts = rebuilt.split("\n\n")
    assert parts == [chunked.chunks[0].content, chunked.chunks[1].content, "tail"]


def test_reassembly_keeps_every_word(make_words) -> None:
    tokens = make_words(2345)
    rebuilt = reassemble(chunk_document(" ".join(tokens), 1000))
    assert rebuilt.split() == tokens
    assert chunk_document(rebuilt, 1000).chunk_count == 3
