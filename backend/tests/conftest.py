"""Test fixtures for Doc Workbench."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

_VENDOR_KEYS = ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "DEEPSEEK_API_KEY", "PERPLEXITY_API_KEY")


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("DWB_DB_PATH", str(tmp_path / "workbench.db"))
    monkeypatch.setenv("DWB_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("DWB_DEFAULT_PROVIDER", "echo")
    for key in _VENDOR_KEYS:
        monkeypatch.delenv(key, raising=False)

    from doc_workbench.api import dependencies as deps

    deps.reset_state()
    yield
    deps.reset_state()


@pytest.fixture(scope="session")
def make_words():
    """Return a factory producing ``count`` distinct words."""

    def _make(count: int, prefix: str = "w") -> list[str]:
        return [f"{prefix}{index}" for index in range(count)]

    return _make


@pytest.fixture(scope="session")
def sample_text() -> str:
    return "Title\n\nParagraph one.\n\n  Paragraph two is here.  "
