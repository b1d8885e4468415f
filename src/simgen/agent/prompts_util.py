from __future__ import annotations

from typing import Sequence

from simgen.agent.state import ArtifactKind
from simgen.prompts import (
    COMMAND_LIST_RUBRIC,
    COMMAND_LIST_SYSTEM_PROMPT,
    COMPONENT_RUBRIC,
    COMPONENT_SYSTEM_PROMPT,
    PLAN_SECTION_TEMPLATE,
)


def system_prompt_for(kind: ArtifactKind) -> str:
    if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST:
        return COMMAND_LIST_SYSTEM_PROMPT
    return COMPONENT_SYSTEM_PROMPT


def rubric_for(kind: ArtifactKind) -> str:
    if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST:
        return COMMAND_LIST_RUBRIC
    return COMPONENT_RUBRIC


def dialect_label(kind: ArtifactKind) -> str:
    """Human-readable name of the dialect, used inside user prompts."""

    if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST:
        return "GeoGebra command list"
    return "React simulation component"


def render_plan(plan: Sequence[str]) -> str:
    if not plan:
        return ""
    steps = "\n".join(f"{index}. {step}" for index, step in enumerate(plan, start=1))
    return PLAN_SECTION_TEMPLATE.format(steps=steps)
