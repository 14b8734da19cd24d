"""Shared FastAPI dependencies."""

from __future__ import annotations

import threading
from functools import lru_cache

from doc_workbench.core.config import Settings, get_settings
from doc_workbench.db.sqlite import SQLiteDatabase
from doc_workbench.db.store import DocumentStore
from doc_workbench.llm.providers import ProviderRegistry
from doc_workbench.services.chat import ChatService
from doc_workbench.services.documents import DocumentService
from doc_workbench.services.rewrite import RewriteService
from doc_workbench.services.synthesis import SynthesisService

_DB: SQLiteDatabase | None = None
_PROVIDERS: ProviderRegistry | None = None
_INIT_LOCK = threading.Lock()


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_database() -> SQLiteDatabase:
    global _DB
    with _INIT_LOCK:
        if _DB is None:
            db = SQLiteDatabase(get_app_settings().db_path)
            db.ensure_schema()
            _DB = db
        return _DB


def get_provider_registry() -> ProviderRegistry:
    global _PROVIDERS
    with _INIT_LOCK:
        if _PROVIDERS is None:
            _PROVIDERS = ProviderRegistry(get_app_settings())
        return _PROVIDERS


def get_store() -> DocumentStore:
    return DocumentStore(get_database())


def get_document_service() -> DocumentService:
    return DocumentService(get_store(), get_app_settings())


def get_rewrite_service() -> RewriteService:
    return RewriteService(get_document_service(), get_provider_registry())


def get_synthesis_service() -> SynthesisService:
    return SynthesisService(get_store(), get_provider_registry(), get_app_settings().chunk_max_words)


def get_chat_service() -> ChatService:
    return ChatService(get_store(), get_provider_registry(), get_app_settings().chat_context_chars)


def reset_state() -> None:
    """Drop cached singletons so the next request rebuilds them."""
    global _DB, _PROVIDERS
    with _INIT_LOCK:
        if _DB is not None:
            _DB.close()
        _DB = None
        _PROVIDERS = None
    get_app_settings.cache_clear()
    get_settings.cache_clear()


__all__ = [
    "get_app_settings",
    "get_database",
    "get_provider_registry",
    "get_store",
    "get_document_service",
    "get_rewrite_service",
    "get_synthesis_service",
    "get_chat_service",
    "reset_state",
]
