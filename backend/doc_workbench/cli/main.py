"""CLI entrypoint for Doc Workbench."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional

import requests
import typer

from doc_workbench.chunking import DEFAULT_MAX_WORDS, chunk_document, chunk_stats
from doc_workbench.core.errors import ChunkingError

app = typer.Typer(name="dwb", help="Doc Workbench command-line interface")
docs_app = typer.Typer(name="docs", help="Manage stored documents")
app.add_typer(docs_app, name="docs")

DEFAULT_HOST = "http://127.0.0.1:8000"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("DWB_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    resp = requests.request(method, url, timeout=120, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def serve(
    bind: str = typer.Option("127.0.0.1", "--bind", help="Interface to listen on"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("doc_workbench.app:app", host=bind, port=port)


@app.command()
def chunk(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file to chunk"),
    max_words: int = typer.Option(DEFAULT_MAX_WORDS, "--max-words", help="Word budget per chunk"),
    full: bool = typer.Option(False, "--full", help="Print chunk contents instead of statistics"),
) -> None:
    """Chunk a local text file without contacting the server."""
    try:
        chunked = chunk_document(path.read_text(encoding="utf-8"), max_words)
    except ChunkingError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)
    _echo_json(chunked.to_dict() if full else chunk_stats(chunked))


@app.command()
def synthesize(
    instructions: str = typer.Argument(..., help="What to do with the selected chunks"),
    doc_a: Optional[str] = typer.Option(None, "--doc-a", help="Document A identifier"),
    doc_b: Optional[str] = typer.Option(None, "--doc-b", help="Document B identifier"),
    chunk_a: List[int] = typer.Option([], "--chunk-a", help="Chunk index from document A (repeatable)"),
    chunk_b: List[int] = typer.Option([], "--chunk-b", help="Chunk index from document B (repeatable)"),
    provider: Optional[str] = typer.Option(None, "--provider", help="Language-model provider"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Synthesize chunks from one or two documents."""
    body: dict[str, object] = {
        "chunkPairs": [{"chunkAIndexes": chunk_a, "chunkBIndexes": chunk_b, "instructions": instructions}],
        "documentAId": doc_a,
        "documentBId": doc_b,
    }
    if provider:
        body["provider"] = provider
    resp = _request("POST", "/documents/synthesize", host=host, json=body)
    typer.echo(resp.json()["synthesizedContent"])


@docs_app.command("list")
def list_documents(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """List stored documents."""
    resp = _request("GET", "/documents", host=host)
    _echo_json(
        [
            {"id": doc["id"], "name": doc["name"], "wordCount": doc["wordCount"], "chunkCount": doc["chunkCount"]}
            for doc in resp.json()
        ]
    )


@docs_app.command("create")
def create_document(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file to upload"),
    title: Optional[str] = typer.Option(None, "--title", help="Display name"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Create a document from a local text file."""
    payload = {"title": title or path.stem, "content": path.read_text(encoding="utf-8")}
    resp = _request("POST", "/documents/from-text", host=host, json=payload)
    _echo_json(resp.json())


@docs_app.command("chunks")
def show_chunks(
    document_id: str = typer.Argument(..., help="Document identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Show chunk statistics for a stored document."""
    resp = _request("GET", f"/documents/{document_id}/chunks/stats", host=host)
    _echo_json(resp.json())


if __name__ == "__main__":
    app()
