"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from doc_workbench.cli.main import app

runner = CliRunner()


def test_chunk_command_prints_stats(tmp_path: Path, make_words) -> None:
    source = tmp_path / "doc.txt"
    source.write_text(" ".join(make_words(25)), encoding="utf-8")
    result = runner.invoke(app, ["chunk", str(source), "--max-words", "10"])
    assert result.exit_code == 0, result.output
    stats = json.loads(result.output)
    assert stats["totalChunks"] == 3
    assert [c["words"] for c in stats["chunks"]] == [10, 10, 5]


def test_chunk_command_full_output(tmp_path: Path) -> None:
    source = tmp_path / "doc.txt"
    source.write_text("one two\n\nthree", encoding="utf-8")
    result = runner.invoke(app, ["chunk", str(source), "--full"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["chunkCount"] == 1
    assert payload["chunks"][0]["content"] == "one two\n\nthree"


def test_chunk_command_rejects_bad_budget(tmp_path: Path) -> None:
    source = tmp_path / "doc.txt"
    source.write_text("words", encoding="utf-8")
    result = runner.invoke(app, ["chunk", str(source), "--max-words", "0"])
    assert result.exit_code == 2
