"""FastAPI application setup for Doc Workbench."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from doc_workbench.api.dependencies import get_app_settings, get_database, get_provider_registry
from doc_workbench.api.routes_admin import router as admin_router
from doc_workbench.api.routes_chat import compare_router, router as chat_router
from doc_workbench.api.routes_documents import router as documents_router
from doc_workbench.api.routes_rewrite import router as rewrite_router
from doc_workbench.core.errors import (
    ChunkIndexError,
    ChunkingError,
    DocumentConflictError,
    DocumentNotFoundError,
    ProviderError,
    SessionNotFoundError,
    UnknownProviderError,
    WorkbenchError,
)
from doc_workbench.core.logging import bind_request_id, configure_logging, get_logger, reset_request_id
from doc_workbench.core.metrics import REQUEST_COUNT, REQUEST_LATENCY
from doc_workbench.utils.ids import new_id

configure_logging()
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_STATUS_BY_ERROR: tuple[tuple[type[WorkbenchError], int], ...] = (
    (DocumentNotFoundError, 404),
    (SessionNotFoundError, 404),
    (ChunkIndexError, 404),
    (DocumentConflictError, 409),
    (ChunkingError, 400),
    (UnknownProviderError, 400),
    (ProviderError, 502),
)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Warm up core singletons on startup."""
    get_app_settings()
    get_database()
    get_provider_registry()
    yield


app = FastAPI(
    title="Doc Workbench",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(admin_router, prefix="", tags=["admin"])
app.include_router(rewrite_router, prefix="", tags=["rewrite"])
app.include_router(documents_router, prefix="/documents", tags=["documents"])
app.include_router(chat_router, prefix="/chat", tags=["chat"])
app.include_router(compare_router, prefix="/compare", tags=["chat"])


@app.middleware("http")
async def record_request_metrics(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    REQUEST_LATENCY.labels(endpoint, request.method).observe(time.perf_counter() - started)
    REQUEST_COUNT.labels(endpoint, request.method, str(response.status_code)).inc()
    return response


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or new_id("req")
    token = bind_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        reset_request_id(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(WorkbenchError)
async def handle_workbench_error(request: Request, exc: WorkbenchError) -> JSONResponse:
    status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())})


__all__ = ["app"]
