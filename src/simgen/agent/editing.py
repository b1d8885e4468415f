"""Single-shot edits of an existing artifact.

These run outside the orchestrator graph: one provider call each, output
normalized by the extractor, provider errors propagated to the caller.
"""

from __future__ import annotations

from typing import Optional, Sequence

from simgen.agent.extractor import extract_artifact
from simgen.agent.prompts_util import system_prompt_for
from simgen.agent.runner import run_agent
from simgen.agent.state import ArtifactKind
from simgen.config.settings import get_settings
from simgen.llm.providers import CompletionProvider
from simgen.prompts import (
    DESCRIBE_SYSTEM_PROMPT,
    DESCRIBE_USER_TEMPLATE,
    HEAL_USER_TEMPLATE,
    REVISE_CURRENT_TEMPLATE,
    REVISE_INSTRUCTION_TEMPLATE,
)
from simgen.utils.message_utils import ChatMessage

DESCRIBE_TEMPERATURE = 0.5
DESCRIBE_MAX_CHARS = 3000


def _noun(kind: ArtifactKind) -> str:
    return "command list" if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST else "component code"


def revise_artifact(
    current: str,
    instruction: str,
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    images: Sequence[str] = (),
) -> str:
    """Apply a user's change request to an existing artifact."""

    noun = _noun(kind)
    raw = run_agent(
        "revise",
        provider,
        system_prompt_for(kind),
        [
            ChatMessage("user", REVISE_CURRENT_TEMPLATE.format(noun=noun, artifact=current)),
            ChatMessage("user", REVISE_INSTRUCTION_TEMPLATE.format(noun=noun, instruction=instruction)),
        ],
        temperature=get_settings().TEMPERATURE if temperature is None else temperature,
        model=model,
        images=images if provider.supports_vision else (),
    )
    return extract_artifact(raw, kind)


def heal_artifact(
    artifact: str,
    error: str,
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
) -> str:
    """Fix an artifact that failed when the sandbox ran it."""

    noun = _noun(kind)
    if ArtifactKind(kind) is ArtifactKind.COMMAND_LIST:
        shape = "as a JSON object"
    else:
        shape = "starting with export default function"
    raw = run_agent(
        "heal",
        provider,
        system_prompt_for(kind),
        [
            ChatMessage(
                "user",
                HEAL_USER_TEMPLATE.format(
                    noun=noun,
                    noun_title=noun[0].upper() + noun[1:],
                    artifact=artifact,
                    error=error,
                    shape=shape,
                ),
            )
        ],
        temperature=get_settings().REFINER_TEMPERATURE,
        model=model,
    )
    return extract_artifact(raw, kind)


def describe_artifact(
    artifact: str,
    subject: str,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
) -> str:
    """One or two sentences describing an artifact for a teacher."""

    reply = run_agent(
        "describe",
        provider,
        DESCRIBE_SYSTEM_PROMPT,
        [
            ChatMessage(
                "user",
                DESCRIBE_USER_TEMPLATE.format(subject=subject, artifact=artifact[:DESCRIBE_MAX_CHARS]),
            )
        ],
        temperature=DESCRIBE_TEMPERATURE,
        model=model,
    )
    return reply.strip()


__all__ = ["describe_artifact", "heal_artifact", "revise_artifact"]
