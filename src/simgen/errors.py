"""Exception types raised by the generation pipeline."""

from __future__ import annotations


class SimgenError(Exception):
    """Base class for simgen errors."""


class ProviderError(SimgenError):
    """A completion backend call failed or returned nothing usable.

    ``message`` keeps the raw upstream text so callers can surface it.
    """

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class GenerationError(SimgenError):
    """The pipeline could not produce any artifact."""
