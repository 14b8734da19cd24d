"""Application configuration handling."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "DWB_"
DEFAULT_CONFIG_PATH = Path("~/.config/doc-workbench/config.yaml")

_YAML_KEY_MAP: Mapping[tuple[str, ...], str] = {
    ("storage", "db_path"): "db_path",
    ("chunking", "max_words"): "chunk_max_words",
    ("llm", "default_provider"): "default_provider",
    ("llm", "timeout"): "provider_timeout",
    ("llm", "max_tokens"): "max_tokens",
    ("llm", "temperature"): "temperature",
    ("llm", "chat_context_chars"): "chat_context_chars",
    ("providers", "openai", "api_key"): "openai_api_key",
    ("providers", "openai", "model"): "openai_model",
    ("providers", "anthropic", "api_key"): "anthropic_api_key",
    ("providers", "anthropic", "model"): "anthropic_model",
    ("providers", "deepseek", "api_key"): "deepseek_api_key",
    ("providers", "deepseek", "model"): "deepseek_model",
    ("providers", "perplexity", "api_key"): "perplexity_api_key",
    ("providers", "perplexity", "model"): "perplexity_model",
}

# Vendor-standard variable names, honoured when no DWB_ override is set.
_VENDOR_KEY_ENV: Mapping[str, str] = {
    "OPENAI_API_KEY": "openai_api_key",
    "ANTHROPIC_API_KEY": "anthropic_api_key",
    "DEEPSEEK_API_KEY": "deepseek_api_key",
    "PERPLEXITY_API_KEY": "perplexity_api_key",
}


class Settings(BaseModel):
    """Runtime configuration loaded from YAML file and environment variables."""

    db_path: Path = Field(default=Path.home() / ".doc-workbench" / "workbench.db")
    chunk_max_words: int = Field(default=1000, gt=0)
    default_provider: str = "deepseek"
    provider_timeout: float = Field(default=60.0, gt=0)
    max_tokens: int = 4000
    temperature: float = 0.7
    chat_context_chars: int = 50000
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    deepseek_api_key: str | None = None
    deepseek_model: str = "deepseek-chat"
    perplexity_api_key: str | None = None
    perplexity_model: str = "sonar"

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator("db_path", mode="before")
    @classmethod
    def _expand_db_path(cls, value: Any) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        if isinstance(value, str):
            return Path(value).expanduser()
        raise TypeError("db_path must be a path or string")

    @field_validator("default_provider")
    @classmethod
    def _lower_provider(cls, value: str) -> str:
        return value.strip().lower()

    def api_key_for(self, provider: str) -> str | None:
        return getattr(self, f"{provider}_api_key", None)

    def model_for(self, provider: str) -> str | None:
        return getattr(self, f"{provider}_model", None)

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> "Settings":
        """Load YAML config and overlay env vars; fall back to defaults."""
        config_path = cls._resolve_config_path(path)
        data: dict[str, Any] = {}
        if config_path and config_path.exists():
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            data.update(_flatten_yaml(raw))
        data.update(_load_env_overrides())
        return cls(**data)

    @staticmethod
    def _resolve_config_path(path: Path | None) -> Path | None:
        if path is not None:
            return path.expanduser()
        env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        resolved_default = DEFAULT_CONFIG_PATH.expanduser()
        return resolved_default if resolved_default.exists() else None


def _flatten_yaml(raw: Mapping[str, Any], prefix: tuple[str, ...] = ()) -> dict[str, Any]:
    """Flatten nested YAML configuration to Settings field names."""
    flat: dict[str, Any] = {}
    for key, value in raw.items():
        next_prefix = prefix + (key,)
        if isinstance(value, Mapping):
            flat.update(_flatten_yaml(value, prefix=next_prefix))
        else:
            mapped_key = _YAML_KEY_MAP.get(next_prefix)
            if mapped_key:
                flat[mapped_key] = value
            elif key in Settings.model_fields:
                flat[key] = value
    return flat


def _load_env_overrides() -> dict[str, Any]:
    """Map environment variables with DWB_ prefix into Settings fields."""
    overrides: dict[str, Any] = {}
    for env_name, field_name in _VENDOR_KEY_ENV.items():
        value = os.environ.get(env_name)
        if value:
            overrides[field_name] = value
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            overrides[field_name] = value
    return overrides


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor for dependency injection."""
    return Settings.from_yaml()


__all__ = ["Settings", "get_settings"]
