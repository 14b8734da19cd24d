"""Text processing helpers."""

from __future__ import annotations

import re

_MARKUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*"), ""),
    (re.compile(r"\*"), ""),
    (re.compile(r"#{1,6}\s?"), ""),
    (re.compile(r"`{1,3}"), ""),
    (re.compile(r"^[ \t]*[-+][ \t]+", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*\d+\.[ \t]+", re.MULTILINE), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^[ \t]*>[ \t]?", re.MULTILINE), ""),
    (re.compile(r"\|"), " "),
    (re.compile(r"---+"), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
)

# Trailing "(note: ...)"-style asides models like to append.
_TRAILING_META_RE = re.compile(
    r"\((?:[^()]*continues[^()]*|[^()]*reader[^()]*|[^()]*end of rewrite[^()]*"
    r"|[^()]*note:[^()]*|[^()]*commentary[^()]*|[^()]*analysis[^()]*)\)\s*$",
    re.IGNORECASE,
)
_ORPHAN_PAREN_RE = re.compile(r"\s*\.\s*\)$")


def words(text: str) -> list[str]:
    """Split on whitespace runs, dropping empty tokens."""
    return text.split()


def count_words(text: str) -> int:
    return len(text.split())


def strip_markup(text: str) -> str:
    """Remove markdown decoration from model output, keeping plain prose."""
    cleaned = text
    for pattern, replacement in _MARKUP_RULES:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = cleaned.strip()
    cleaned = _TRAILING_META_RE.sub("", cleaned)
    cleaned = _ORPHAN_PAREN_RE.sub(".", cleaned)
    return cleaned.strip()


__all__ = ["words", "count_words", "strip_markup"]
