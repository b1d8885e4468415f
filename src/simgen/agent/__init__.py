"""Agent modules for the simulation generation pipeline."""

from .editing import describe_artifact, heal_artifact, revise_artifact
from .extractor import extract_artifact
from .graph import agenerate_artifact, generate_artifact
from .planner import plan_steps
from .state import (
    MAX_ATTEMPTS,
    ArtifactKind,
    GenerationContext,
    GenerationResult,
    Outcome,
    ValidationVerdict,
)
from .syntax_validator import validate_local
from .semantic_validator import validate_semantics
from .variables import ControlVariable, detect_variables

__all__ = [
    "ArtifactKind",
    "ControlVariable",
    "GenerationContext",
    "GenerationResult",
    "MAX_ATTEMPTS",
    "Outcome",
    "ValidationVerdict",
    "agenerate_artifact",
    "describe_artifact",
    "detect_variables",
    "extract_artifact",
    "generate_artifact",
    "heal_artifact",
    "plan_steps",
    "revise_artifact",
    "validate_local",
    "validate_semantics",
]
