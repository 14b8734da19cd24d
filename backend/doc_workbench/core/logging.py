"""Logging utilities for Doc Workbench."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar, Token
from typing import Any

import orjson

_DEFAULT_LEVEL = os.environ.get("DWB_LOG_LEVEL", "INFO")

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def bind_request_id(request_id: str) -> Token[str]:
    """Tag every record logged in the current context with ``request_id``."""
    return request_id_ctx.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    request_id_ctx.reset(token)


class JsonFormatter(logging.Formatter):
    """Single-line JSON records carrying ``ctx_*`` extras and the bound request id."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - thin wrapper
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_ctx.get()
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                payload[key] = value
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(level: str | int = _DEFAULT_LEVEL, use_json: bool = True) -> None:
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.handlers = [handler]


def get_logger(name: str = "doc_workbench") -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = [
    "JsonFormatter",
    "bind_request_id",
    "configure_logging",
    "get_logger",
    "request_id_ctx",
    "reset_request_id",
]
