"""Single entry point through which every agent reaches a provider."""

from __future__ import annotations

import time
from typing import Optional, Sequence

from simgen.errors import ProviderError
from simgen.llm.providers import CompletionOptions, CompletionProvider
from simgen.utils.message_utils import ChatMessage
from simgen.utils.telemetry import log_ai_call


def _log(
    operation: str,
    provider: CompletionProvider,
    model: Optional[str],
    started: float,
    error: Optional[str] = None,
) -> None:
    log_ai_call(
        operation,
        provider.name,
        model or provider.default_model,
        int((time.monotonic() - started) * 1000),
        error=error,
    )


def run_agent(
    operation: str,
    provider: CompletionProvider,
    system_prompt: str,
    messages: Sequence[ChatMessage],
    *,
    temperature: float,
    model: Optional[str] = None,
    images: Sequence[str] = (),
) -> str:
    """Call ``provider`` once and log the outcome; provider errors propagate."""

    started = time.monotonic()
    options = CompletionOptions(temperature=temperature, model=model, images=tuple(images))
    try:
        text = provider.complete(system_prompt, messages, options)
    except ProviderError as exc:
        _log(operation, provider, model, started, error=exc.message)
        raise
    _log(operation, provider, model, started)
    return text


async def arun_agent(
    operation: str,
    provider: CompletionProvider,
    system_prompt: str,
    messages: Sequence[ChatMessage],
    *,
    temperature: float,
    model: Optional[str] = None,
    images: Sequence[str] = (),
) -> str:
    """Async :func:`run_agent`; cancelling the caller cancels the provider call."""

    started = time.monotonic()
    options = CompletionOptions(temperature=temperature, model=model, images=tuple(images))
    try:
        text = await provider.acomplete(system_prompt, messages, options)
    except ProviderError as exc:
        _log(operation, provider, model, started, error=exc.message)
        raise
    _log(operation, provider, model, started)
    return text
