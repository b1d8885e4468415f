"""Completion provider package."""

from __future__ import annotations

from simgen.errors import ProviderError
from simgen.utils.message_utils import ChatMessage

from .client import get_chat_model
from .providers import (
    CompletionOptions,
    CompletionProvider,
    OllamaProvider,
    OpenAICompatibleProvider,
    get_provider,
)

__all__ = [
    "ChatMessage",
    "CompletionOptions",
    "CompletionProvider",
    "OllamaProvider",
    "OpenAICompatibleProvider",
    "ProviderError",
    "get_chat_model",
    "get_provider",
]
