"""AI-assisted review of candidates that already passed the local check."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from simgen.agent.prompts_util import rubric_for
from simgen.agent.runner import arun_agent, run_agent
from simgen.agent.state import ArtifactKind, ValidationVerdict
from simgen.config.settings import get_settings
from simgen.errors import ProviderError
from simgen.llm.providers import CompletionProvider
from simgen.prompts import VALIDATOR_USER_TEMPLATE
from simgen.utils.message_utils import ChatMessage

logger = logging.getLogger(__name__)

ACCEPTANCE_TOKEN = "VALID"
_LIST_PREFIX = re.compile(r"^(?:\d+[.)]|[-*•])\s*")
_DECORATION = " .*_`"


def _is_acceptance(line: str) -> bool:
    return line.strip(_DECORATION).upper() == ACCEPTANCE_TOKEN


def parse_review(response: str) -> List[str]:
    """Turn a reviewer reply into defect strings; an empty list means accepted."""

    lines = [line.strip() for line in (response or "").splitlines() if line.strip()]
    if not lines:
        return []
    # "VALID" followed only by remarks, no listed items
    if _is_acceptance(lines[0]) and not any(
        _LIST_PREFIX.match(line) for line in lines[1:]
    ):
        return []

    defects: List[str] = []
    for stripped in lines:
        if stripped.startswith("#"):
            continue
        item = _LIST_PREFIX.sub("", stripped).strip()
        if not item or _is_acceptance(item):
            continue
        defects.append(item)
    return defects


def validate_semantics(
    candidate: str,
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
) -> ValidationVerdict:
    """Ask the provider to review ``candidate`` against the dialect rubric.

    A provider failure yields an accepting, inconclusive verdict.
    """

    try:
        response = run_agent(
            "semantic_validator",
            provider,
            rubric_for(kind),
            [ChatMessage("user", VALIDATOR_USER_TEMPLATE.format(candidate=candidate))],
            temperature=get_settings().VALIDATOR_TEMPERATURE,
            model=model,
        )
    except ProviderError as exc:
        logger.warning("Semantic validation unavailable, accepting candidate unchecked: %s", exc)
        return ValidationVerdict(accepted=True, inconclusive=True)

    return ValidationVerdict.from_defects(parse_review(response))


async def avalidate_semantics(
    candidate: str,
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
) -> ValidationVerdict:
    try:
        response = await arun_agent(
            "semantic_validator",
            provider,
            rubric_for(kind),
            [ChatMessage("user", VALIDATOR_USER_TEMPLATE.format(candidate=candidate))],
            temperature=get_settings().VALIDATOR_TEMPERATURE,
            model=model,
        )
    except ProviderError as exc:
        logger.warning("Semantic validation unavailable, accepting candidate unchecked: %s", exc)
        return ValidationVerdict(accepted=True, inconclusive=True)

    return ValidationVerdict.from_defects(parse_review(response))


__all__ = ["ACCEPTANCE_TOKEN", "avalidate_semantics", "parse_review", "validate_semantics"]
