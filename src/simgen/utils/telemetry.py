"""Logging helpers and optional Langfuse tracing."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from langfuse.langchain import CallbackHandler

from simgen.config.settings import get_settings

logger = logging.getLogger("simgen.ai")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a basic stream handler for applications embedding simgen."""

    logging.basicConfig(level=(level or get_settings().LOG_LEVEL).upper(), format=_LOG_FORMAT)


def log_ai_call(
    operation: str,
    provider: str,
    model: Optional[str],
    duration_ms: int,
    error: Optional[str] = None,
) -> None:
    if error:
        logger.error(
            "AI %s failed provider=%s model=%s duration_ms=%d error=%s",
            operation,
            provider,
            model or "default",
            duration_ms,
            error,
        )
    else:
        logger.info(
            "AI %s completed provider=%s model=%s duration_ms=%d",
            operation,
            provider,
            model or "default",
            duration_ms,
        )


def get_trace_callbacks() -> List[Any]:
    """Return LangChain callbacks for Langfuse when credentials are configured."""

    if not get_settings().tracing_enabled:
        return []
    return [CallbackHandler()]
