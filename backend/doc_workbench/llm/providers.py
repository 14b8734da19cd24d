"""Language-model providers behind one ``generate`` capability."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

import requests

from doc_workbench.core.config import Settings
from doc_workbench.core.errors import UnknownProviderError
from doc_workbench.core.logging import get_logger
from doc_workbench.core.metrics import LLM_LATENCY

logger = get_logger(__name__)

FALLBACK_MESSAGE = "I apologize, but I'm having trouble processing your request right now. Please try again."

History = Sequence[Mapping[str, str]]


@dataclass(slots=True)
class ChatResponse:
    message: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProviderCallError(Exception):
    """Internal signal for a failed or empty completion."""


class ChatProvider(ABC):
    """A model endpoint that answers a prompt given document context and history.

    ``generate`` never raises for transport or API failures. It returns a
    ``ChatResponse`` whose ``error`` is set, leaving the decision to the
    caller.
    """

    name: str = "base"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float = 60.0,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.session = session or requests.Session()

    def generate(self, prompt: str, context: str = "", history: History | None = None) -> ChatResponse:
        started = time.perf_counter()
        try:
            message = self._complete(system_prompt(context), list(history or []), prompt)
        except (requests.RequestException, ProviderCallError, ValueError, KeyError, IndexError) as exc:
            LLM_LATENCY.labels(self.name, "error").observe(time.perf_counter() - started)
            logger.warning("%s call failed: %s", self.name, exc, extra={"ctx_provider": self.name})
            return ChatResponse(message=FALLBACK_MESSAGE, error=str(exc) or type(exc).__name__)
        LLM_LATENCY.labels(self.name, "ok").observe(time.perf_counter() - started)
        return ChatResponse(message=message)

    @abstractmethod
    def _complete(self, system: str, history: list[Mapping[str, str]], prompt: str) -> str:
        """Return the assistant text or raise."""

    def _require_key(self) -> str:
        if not self.api_key:
            raise ProviderCallError(f"No API key configured for {self.name}")
        return self.api_key

    def _post(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> dict[str, Any]:
        resp = self.session.post(url, headers=headers, json=body, timeout=self.timeout)
        if not resp.ok:
            raise ProviderCallError(f"{self.name} API error: {resp.status_code}")
        return resp.json()


class OpenAICompatibleProvider(ChatProvider):
    """Providers speaking the ``/chat/completions`` dialect."""

    base_url: str = "https://api.openai.com/v1"

    def _complete(self, system: str, history: list[Mapping[str, str]], prompt: str) -> str:
        key = self._require_key()
        messages = [
            {"role": "system", "content": system},
            *({"role": item["role"], "content": item["content"]} for item in history),
            {"role": "user", "content": prompt},
        ]
        data = self._post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {key}", "Content-Type": "application/json"},
            body={
                "model": self.model,
                "messages": messages,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
            },
        )
        content = (data["choices"][0].get("message") or {}).get("content")
        if not content:
            raise ProviderCallError("No response generated")
        return content


class OpenAIProvider(OpenAICompatibleProvider):
    name = "openai"
    base_url = "https://api.openai.com/v1"


class DeepSeekProvider(OpenAICompatibleProvider):
    name = "deepseek"
    base_url = "https://api.deepseek.com/v1"


class PerplexityProvider(OpenAICompatibleProvider):
    name = "perplexity"
    base_url = "https://api.perplexity.ai"


class AnthropicProvider(ChatProvider):
    name = "anthropic"
    base_url = "https://api.anthropic.com/v1"
    api_version = "2023-06-01"

    def _complete(self, system: str, history: list[Mapping[str, str]], prompt: str) -> str:
        key = self._require_key()
        data = self._post(
            f"{self.base_url}/messages",
            headers={
                "x-api-key": key,
                "anthropic-version": self.api_version,
                "content-type": "application/json",
            },
            body={
                "model": self.model,
                "system": system,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
                "messages": [
                    *({"role": item["role"], "content": item["content"]} for item in history),
                    {"role": "user", "content": prompt},
                ],
            },
        )
        text = "".join(block.get("text", "") for block in (data.get("content") or []) if block.get("type") == "text")
        if not text:
            raise ProviderCallError("No response generated")
        return text


class EchoProvider(ChatProvider):
    """Offline provider that answers with the prompt itself."""

    name = "echo"

    def _complete(self, system: str, history: list[Mapping[str, str]], prompt: str) -> str:
        return prompt


def system_prompt(context: str) -> str:
    if context and context.strip():
        return (
            "You are a professional academic writing assistant. The user has provided "
            f'the following document:\n\n"""\n{context}\n"""\n\n'
            "Reference the document where relevant and answer in plain text without markdown symbols."
        )
    return "You are a professional academic writing assistant. Answer in plain text without markdown symbols."


ProviderFactory = Callable[[Settings, requests.Session], ChatProvider]


def _configured(cls: type[ChatProvider]) -> ProviderFactory:
    def factory(settings: Settings, session: requests.Session) -> ChatProvider:
        return cls(
            api_key=settings.api_key_for(cls.name),
            model=settings.model_for(cls.name),
            timeout=settings.provider_timeout,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            session=session,
        )

    return factory


class ProviderRegistry:
    """Resolve provider names to configured, cached provider instances."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self._factories: dict[str, ProviderFactory] = {
            cls.name: _configured(cls)
            for cls in (OpenAIProvider, AnthropicProvider, DeepSeekProvider, PerplexityProvider, EchoProvider)
        }
        self._instances: dict[str, ChatProvider] = {}

    def register(self, provider: ChatProvider) -> None:
        self._instances[provider.name] = provider

    def names(self) -> list[str]:
        return sorted(set(self._factories) | set(self._instances))

    def get(self, name: str | None = None) -> ChatProvider:
        key = (name or self.settings.default_provider).strip().lower()
        if key not in self._instances:
            factory = self._factories.get(key)
            if factory is None:
                raise UnknownProviderError(key)
            self._instances[key] = factory(self.settings, self.session)
        return self._instances[key]


__all__ = [
    "ChatResponse",
    "ChatProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "DeepSeekProvider",
    "PerplexityProvider",
    "EchoProvider",
    "ProviderRegistry",
    "FALLBACK_MESSAGE",
]
