from __future__ import annotations
from typing import Any

from langchain_openai import ChatOpenAI
from simgen.config.settings import get_settings


def get_chat_model(**overrides: Any) -> ChatOpenAI:
    """Build a chat-completions client from settings plus per-call overrides.

    Retries are disabled here; the orchestrator owns retry policy.
    """

    cfg = get_settings()
    params = {
        "model": cfg.LLM_MODEL,
        "api_key": cfg.LLM_API_KEY or "dummy",
        "temperature": cfg.TEMPERATURE,
        "timeout": cfg.LLM_TIMEOUT,
        "max_retries": 0,
    }
    params.update(overrides)
    return ChatOpenAI(**params)
