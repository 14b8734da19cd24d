"""Tests for text helpers."""

from doc_workbench.utils.text import count_words, strip_markup


def test_count_words_ignores_whitespace_runs() -> None:
    assert count_words("  a\n\nb\tc  ") == 3
    assert count_words("") == 0


def test_strip_markup_removes_markdown() -> None:
    raw = "# Heading\n\n**Bold** and *italic* with `code`.\n\n- item one\n2. item two\n> quoted\n[label](http://x.y)"
    cleaned = strip_markup(raw)
    assert cleaned == "Heading\n\nBold and italic with code.\n\nitem one\nitem two\nquoted\nlabel"


def test_strip_markup_collapses_blank_lines_and_rules() -> None:
    assert strip_markup("one\n\n\n\ntwo\n---\nthree") == "one\n\ntwo\n\nthree"


def test_strip_markup_drops_trailing_meta_note() -> None:
    assert strip_markup("The argument holds. (Note: the debate continues)") == "The argument holds."
