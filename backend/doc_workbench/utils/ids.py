"""ID helpers."""

from __future__ import annotations

import uuid


def new_id(prefix: str | None = None) -> str:
    """Return a random UUID4 hex string, namespaced by ``prefix`` when given."""
    base = uuid.uuid4().hex
    return f"{prefix}_{base}" if prefix else base


def chunk_id(chunk_index: int) -> str:
    """Stable identifier for a chunk, derived only from its position."""
    return f"chunk_{chunk_index}"
