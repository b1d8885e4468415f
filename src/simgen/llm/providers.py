"""Completion provider adapters.

Every backend is reached through :class:`CompletionProvider.complete`. The
concrete adapters speak the OpenAI chat-completions protocol through
LangChain's ``ChatOpenAI``; hosted backends need an API key, the local Ollama
backend does not.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from simgen.config.settings import get_settings
from simgen.errors import ProviderError
from simgen.llm.client import get_chat_model
from simgen.utils.message_utils import ChatMessage, normalize_content, to_langchain_messages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionOptions:
    temperature: float = 0.7
    model: Optional[str] = None
    images: Sequence[str] = field(default_factory=tuple)


class CompletionProvider(ABC):
    """Uniform call surface over a text-generation backend."""

    name: str = "provider"
    supports_vision: bool = False
    default_model: Optional[str] = None

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        options: Optional[CompletionOptions] = None,
    ) -> str:
        """Return the completion text or raise :class:`ProviderError`."""

    async def acomplete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        options: Optional[CompletionOptions] = None,
    ) -> str:
        """Async variant of :meth:`complete`.

        Adapters with a native async client override this so a cancelled
        task also cancels the outbound request; the default runs
        :meth:`complete` in a worker thread.
        """
        return await asyncio.to_thread(self.complete, system_prompt, messages, options)


class ChatModelProvider(CompletionProvider):
    """Adapter for any backend exposing ``/chat/completions``."""

    def __init__(
        self,
        name: str,
        base_url: Optional[str],
        api_key: Optional[str],
        default_model: Optional[str],
        *,
        supports_vision: bool = False,
        timeout: Optional[float] = None,
    ):
        self.name = name
        self.base_url = base_url
        self.api_key = api_key
        self.default_model = default_model
        self.supports_vision = supports_vision
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, model={self.default_model!r})"

    def _chat_model(self, options: CompletionOptions):
        overrides = {
            "model": options.model or self.default_model,
            "api_key": self.api_key or "dummy",
            "temperature": options.temperature,
        }
        if self.base_url:
            overrides["base_url"] = self.base_url
        if self.timeout is not None:
            overrides["timeout"] = self.timeout
        return get_chat_model(**overrides)

    def complete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        options: Optional[CompletionOptions] = None,
    ) -> str:
        options = options or CompletionOptions()
        payload = to_langchain_messages(system_prompt, messages, options.images)
        try:
            response = self._chat_model(options).invoke(payload)
        except Exception as exc:
            raise ProviderError(self.name, str(exc)) from exc
        return self._reply_text(response)

    async def acomplete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        options: Optional[CompletionOptions] = None,
    ) -> str:
        options = options or CompletionOptions()
        payload = to_langchain_messages(system_prompt, messages, options.images)
        try:
            response = await self._chat_model(options).ainvoke(payload)
        except Exception as exc:
            raise ProviderError(self.name, str(exc)) from exc
        return self._reply_text(response)

    def _reply_text(self, response) -> str:
        text = normalize_content(getattr(response, "content", response))
        if not text.strip():
            raise ProviderError(self.name, "empty completion")
        return text


class OpenAICompatibleProvider(ChatModelProvider):
    """Hosted, key-authenticated backend."""

    def __init__(
        self,
        name: str,
        api_key: Optional[str],
        *,
        base_url: Optional[str],
        default_model: Optional[str],
        supports_vision: bool = False,
        timeout: Optional[float] = None,
    ):
        if not api_key:
            raise ProviderError(name, "an API key is required for this provider")
        super().__init__(
            name,
            base_url,
            api_key,
            default_model,
            supports_vision=supports_vision,
            timeout=timeout,
        )


class OllamaProvider(ChatModelProvider):
    """Local keyless backend served by Ollama."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        default_model: Optional[str] = "llama3",
        supports_vision: bool = False,
        timeout: Optional[float] = None,
    ):
        root = (base_url or get_settings().OLLAMA_BASE_URL).rstrip("/")
        super().__init__(
            "ollama",
            f"{root}/v1",
            None,
            default_model,
            supports_vision=supports_vision,
            timeout=timeout,
        )


@dataclass(frozen=True)
class ProviderSpec:
    base_url: Optional[str]
    default_model: str
    requires_api_key: bool = True
    supports_vision: bool = False


PROVIDERS: Dict[str, ProviderSpec] = {
    "deepseek": ProviderSpec("https://api.deepseek.com", "deepseek-chat"),
    "qwen": ProviderSpec("https://dashscope-intl.aliyuncs.com/compatible-mode/v1", "qwen-turbo"),
    "gemini": ProviderSpec(
        "https://generativelanguage.googleapis.com/v1beta/openai/",
        "gemini-1.5-flash",
        supports_vision=True,
    ),
    "ollama": ProviderSpec(None, "llama3", requires_api_key=False),
}


def get_provider(
    name: Optional[str] = None,
    api_key: Optional[str] = None,
    *,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    supports_vision: Optional[bool] = None,
) -> CompletionProvider:
    """Resolve a provider identifier to a configured adapter.

    Without ``name`` the configured default provider is used, together with
    the configured default model and API key.
    """

    cfg = get_settings()
    key = (name or cfg.LLM_PROVIDER).strip().lower()
    spec = PROVIDERS.get(key)
    if spec is None:
        raise ProviderError(key, f"unknown provider (expected one of {', '.join(sorted(PROVIDERS))})")

    if name is None:
        model = model or cfg.LLM_MODEL
    vision = spec.supports_vision if supports_vision is None else supports_vision
    logger.debug("Resolved provider %s model=%s vision=%s", key, model or spec.default_model, vision)

    if not spec.requires_api_key:
        return OllamaProvider(
            base_url=base_url,
            default_model=model or spec.default_model,
            supports_vision=vision,
            timeout=cfg.LLM_TIMEOUT,
        )
    return OpenAICompatibleProvider(
        key,
        api_key or cfg.LLM_API_KEY,
        base_url=base_url or spec.base_url,
        default_model=model or spec.default_model,
        supports_vision=vision,
        timeout=cfg.LLM_TIMEOUT,
    )


__all__ = [
    "ChatModelProvider",
    "CompletionOptions",
    "CompletionProvider",
    "OllamaProvider",
    "OpenAICompatibleProvider",
    "PROVIDERS",
    "ProviderSpec",
    "get_provider",
]
