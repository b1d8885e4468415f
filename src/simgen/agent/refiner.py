"""Refiner agent: conservative repair of a rejected candidate."""

from __future__ import annotations

from typing import List, Optional, Sequence

from simgen.agent.extractor import extract_artifact
from simgen.agent.prompts_util import system_prompt_for
from simgen.agent.runner import arun_agent, run_agent
from simgen.agent.state import ArtifactKind
from simgen.config.settings import get_settings
from simgen.llm.providers import CompletionProvider
from simgen.prompts import REFINER_USER_TEMPLATE
from simgen.utils.message_utils import ChatMessage


def build_refinement_request(candidate: str, defects: Sequence[str]) -> str:
    listed = "\n".join(f"{index}. {defect}" for index, defect in enumerate(defects, start=1))
    return REFINER_USER_TEMPLATE.format(candidate=candidate, defects=listed or "1. Unknown defect")


def refinement_temperature(generator_temperature: Optional[float] = None) -> float:
    """Never above the temperature the candidate was generated with."""

    cfg = get_settings()
    ceiling = cfg.TEMPERATURE if generator_temperature is None else generator_temperature
    return min(cfg.REFINER_TEMPERATURE, ceiling)


def _refinement_messages(candidate: str, defects: Sequence[str]) -> List[ChatMessage]:
    return [ChatMessage("user", build_refinement_request(candidate, defects))]


def refine_candidate(
    candidate: str,
    defects: Sequence[str],
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
    generator_temperature: Optional[float] = None,
) -> str:
    """Return a corrected, normalized candidate. Raises ``ProviderError``."""

    raw = run_agent(
        "refiner",
        provider,
        system_prompt_for(kind),
        _refinement_messages(candidate, defects),
        temperature=refinement_temperature(generator_temperature),
        model=model,
    )
    return extract_artifact(raw, kind)


async def arefine_candidate(
    candidate: str,
    defects: Sequence[str],
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
    generator_temperature: Optional[float] = None,
) -> str:
    raw = await arun_agent(
        "refiner",
        provider,
        system_prompt_for(kind),
        _refinement_messages(candidate, defects),
        temperature=refinement_temperature(generator_temperature),
        model=model,
    )
    return extract_artifact(raw, kind)
