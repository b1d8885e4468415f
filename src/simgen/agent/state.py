"""State schema and value types shared across the generation pipeline."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, List, Optional, Tuple

from typing_extensions import NotRequired, Required, TypedDict

MAX_ATTEMPTS = 3
ENTRY_MARKER = "export default function"


class ArtifactKind(str, Enum):
    COMPONENT_SOURCE = "component_source"
    COMMAND_LIST = "command_list"


class Outcome(str, Enum):
    ACCEPTED = "accepted"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"


class GenerationContext(TypedDict, total=False):
    """Per-request working state owned by the orchestrator graph."""

    request_text: Required[str]
    artifact_kind: Required[ArtifactKind]
    started_at: Required[float]
    images: NotRequired[List[str]]

    plan: NotRequired[List[str]]
    candidate: NotRequired[Optional[str]]
    defects: NotRequired[List[str]]
    defect_history: Annotated[List[List[str]], operator.add]
    attempt_count: NotRequired[int]

    outcome: NotRequired[Optional[Outcome]]
    unverified: NotRequired[bool]


@dataclass(frozen=True)
class ValidationVerdict:
    accepted: bool
    defects: Tuple[str, ...] = ()
    inconclusive: bool = False

    @classmethod
    def from_defects(cls, defects: List[str]) -> "ValidationVerdict":
        return cls(accepted=not defects, defects=tuple(defects))


@dataclass(frozen=True)
class GenerationResult:
    """Final artifact plus the audit trail of the run that produced it."""

    artifact: str
    plan: Tuple[str, ...]
    attempts: int
    duration_ms: int
    artifact_kind: ArtifactKind = ArtifactKind.COMPONENT_SOURCE
    outcome: Outcome = Outcome.ACCEPTED
    unverified: bool = False
    defect_history: Tuple[Tuple[str, ...], ...] = field(default_factory=tuple)

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED
