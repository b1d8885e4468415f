"""Plan, generate, validate and refine interactive simulation artifacts."""

from simgen.agent import (
    ArtifactKind,
    GenerationResult,
    Outcome,
    agenerate_artifact,
    generate_artifact,
)
from simgen.errors import GenerationError, ProviderError, SimgenError
from simgen.llm import get_provider

__all__ = [
    "ArtifactKind",
    "GenerationError",
    "GenerationResult",
    "Outcome",
    "ProviderError",
    "SimgenError",
    "agenerate_artifact",
    "generate_artifact",
    "get_provider",
]
