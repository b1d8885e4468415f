"""Generator agent: first candidate from the request and the plan."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from simgen.agent.extractor import extract_artifact
from simgen.agent.prompts_util import render_plan, system_prompt_for
from simgen.agent.runner import arun_agent, run_agent
from simgen.agent.state import ArtifactKind
from simgen.config.settings import get_settings
from simgen.llm.providers import CompletionProvider
from simgen.prompts import VISION_NOTE
from simgen.utils.message_utils import ChatMessage

logger = logging.getLogger(__name__)


def build_generation_request(request_text: str, plan: Sequence[str], image_count: int = 0) -> str:
    content = request_text
    if image_count:
        content += VISION_NOTE.format(count=image_count)
    return content + render_plan(plan)


def _usable_images(provider: CompletionProvider, images: Sequence[str]) -> Sequence[str]:
    if images and not provider.supports_vision:
        logger.warning(
            "Provider %s has no vision support; dropping %d image(s).",
            provider.name,
            len(images),
        )
        return ()
    return images


def _generation_messages(request_text: str, plan: Sequence[str], images: Sequence[str]) -> List[ChatMessage]:
    return [ChatMessage("user", build_generation_request(request_text, plan, len(images)))]


def generate_candidate(
    request_text: str,
    kind: ArtifactKind,
    plan: Sequence[str],
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    images: Sequence[str] = (),
) -> str:
    """Produce the first normalized candidate. Raises ``ProviderError``."""

    images = _usable_images(provider, images)
    raw = run_agent(
        "generator",
        provider,
        system_prompt_for(kind),
        _generation_messages(request_text, plan, images),
        temperature=get_settings().TEMPERATURE if temperature is None else temperature,
        model=model,
        images=images,
    )
    return extract_artifact(raw, kind)


async def agenerate_candidate(
    request_text: str,
    kind: ArtifactKind,
    plan: Sequence[str],
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    images: Sequence[str] = (),
) -> str:
    images = _usable_images(provider, images)
    raw = await arun_agent(
        "generator",
        provider,
        system_prompt_for(kind),
        _generation_messages(request_text, plan, images),
        temperature=get_settings().TEMPERATURE if temperature is None else temperature,
        model=model,
        images=images,
    )
    return extract_artifact(raw, kind)
