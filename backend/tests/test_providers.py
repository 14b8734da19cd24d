"""Tests for language-model providers."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from doc_workbench.core.config import Settings
from doc_workbench.core.errors import UnknownProviderError
from doc_workbench.llm.providers import (
    FALLBACK_MESSAGE,
    AnthropicProvider,
    EchoProvider,
    OpenAIProvider,
    PerplexityProvider,
    ProviderRegistry,
)


class FakeResponse:
    def __init__(self, status_code: int, payload: dict[str, Any]) -> None:
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> dict[str, Any]:
        return self._payload


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, headers: dict[str, str], json: dict[str, Any], timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response


def test_openai_request_shape() -> None:
    session = FakeSession(FakeResponse(200, {"choices": [{"message": {"content": "hello"}}]}))
    provider = OpenAIProvider(api_key="sk", model="gpt-4o", timeout=3, session=session)  # type: ignore[arg-type]
    response = provider.generate("question", "doc text", [{"role": "assistant", "content": "earlier"}])

    assert response.ok
    assert response.message == "hello"
    call = session.calls[0]
    assert call["url"] == "https://api.openai.com/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk"
    assert call["timeout"] == 3
    messages = call["json"]["messages"]
    assert [m["role"] for m in messages] == ["system", "assistant", "user"]
    assert "doc text" in messages[0]["content"]
    assert messages[-1]["content"] == "question"


def test_http_error_becomes_error_response() -> None:
    session = FakeSession(FakeResponse(503, {}))
    provider = PerplexityProvider(api_key="pk", model="sonar", session=session)  # type: ignore[arg-type]
    response = provider.generate("q")
    assert not response.ok
    assert response.message == FALLBACK_MESSAGE
    assert "503" in response.error
    assert session.calls[0]["url"].startswith("https://api.perplexity.ai")


def test_transport_error_becomes_error_response() -> None:
    session = FakeSession(exc=requests.ConnectionError("boom"))
    provider = OpenAIProvider(api_key="sk", model="m", session=session)  # type: ignore[arg-type]
    response = provider.generate("q")
    assert response.error == "boom"


def test_missing_key_is_reported_without_calling_out() -> None:
    session = FakeSession(FakeResponse(200, {}))
    response = OpenAIProvider(api_key=None, model="m", session=session).generate("q")  # type: ignore[arg-type]
    assert "No API key" in response.error
    assert session.calls == []


def test_empty_completion_is_an_error() -> None:
    session = FakeSession(FakeResponse(200, {"choices": [{"message": {"content": ""}}]}))
    response = OpenAIProvider(api_key="sk", model="m", session=session).generate("q")  # type: ignore[arg-type]
    assert response.error == "No response generated"


@pytest.mark.parametrize(
    "provider_cls, payload",
    [
        (OpenAIProvider, {"choices": [{"message": None}]}),
        (AnthropicProvider, {"content": None}),
    ],
)
def test_null_payload_fields_become_error_response(provider_cls, payload: dict[str, Any]) -> None:
    session = FakeSession(FakeResponse(200, payload))
    response = provider_cls(api_key="k", model="m", session=session).generate("q")
    assert not response.ok
    assert response.message == FALLBACK_MESSAGE
    assert response.error == "No response generated"


def test_anthropic_parses_text_blocks() -> None:
    payload = {"content": [{"type": "text", "text": "part one "}, {"type": "text", "text": "part two"}]}
    session = FakeSession(FakeResponse(200, payload))
    provider = AnthropicProvider(api_key="ak", model="claude", session=session)  # type: ignore[arg-type]
    response = provider.generate("q", "", [])
    assert response.message == "part one part two"
    call = session.calls[0]
    assert call["headers"]["x-api-key"] == "ak"
    assert call["json"]["messages"] == [{"role": "user", "content": "q"}]
    assert "system" in call["json"]


def test_echo_provider() -> None:
    assert EchoProvider().generate("say this").message == "say this"


def test_registry_resolves_configured_providers() -> None:
    settings = Settings(default_provider="deepseek", deepseek_api_key="dk", deepseek_model="deepseek-chat")
    registry = ProviderRegistry(settings)
    provider = registry.get()
    assert provider.name == "deepseek"
    assert provider.api_key == "dk"
    assert provider.model == "deepseek-chat"
    assert registry.get("DeepSeek") is provider
    assert "anthropic" in registry.names()


def test_registry_unknown_provider() -> None:
    with pytest.raises(UnknownProviderError):
        ProviderRegistry(Settings()).get("grok")


def test_registry_register_overrides() -> None:
    registry = ProviderRegistry(Settings())
    custom = EchoProvider()
    registry.register(custom)
    assert registry.get("echo") is custom
