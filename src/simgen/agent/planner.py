from __future__ import annotations
import logging
import re
from typing import List, Optional

from simgen.agent.prompts_util import dialect_label
from simgen.agent.runner import arun_agent, run_agent
from simgen.agent.state import ArtifactKind
from simgen.config.settings import get_settings
from simgen.errors import ProviderError
from simgen.llm.providers import CompletionProvider
from simgen.prompts import DEFAULT_PLAN_STEP, PLANNER_SYSTEM_PROMPT, PLANNER_USER_TEMPLATE
from simgen.utils.message_utils import ChatMessage

logger = logging.getLogger(__name__)

_NUMBERED_LINE = re.compile(r"^\s*\d+[.)]\s*(.*)$")


def parse_plan(response: str) -> List[str]:
    steps: List[str] = []
    for line in (response or "").splitlines():
        match = _NUMBERED_LINE.match(line)
        if match and match.group(1).strip():
            steps.append(match.group(1).strip())
    return steps


def _planner_messages(request_text: str, kind: ArtifactKind) -> List[ChatMessage]:
    return [
        ChatMessage(
            "user",
            PLANNER_USER_TEMPLATE.format(dialect=dialect_label(kind), request_text=request_text),
        )
    ]


def _steps_or_default(response: str) -> List[str]:
    steps = parse_plan(response)
    if not steps:
        logger.warning("Planner reply had no numbered steps; using the default plan.")
        return [DEFAULT_PLAN_STEP]
    return steps


def plan_steps(
    request_text: str,
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
) -> List[str]:
    """Ask for an ordered implementation plan; never fails.

    Planning only steers generation, so any problem falls back to a single
    default step.
    """

    try:
        response = run_agent(
            "planner",
            provider,
            PLANNER_SYSTEM_PROMPT,
            _planner_messages(request_text, kind),
            temperature=get_settings().PLANNER_TEMPERATURE,
            model=model,
        )
    except ProviderError:
        logger.warning("Planner failed; using the default plan.", exc_info=True)
        return [DEFAULT_PLAN_STEP]
    return _steps_or_default(response)


async def aplan_steps(
    request_text: str,
    kind: ArtifactKind,
    provider: CompletionProvider,
    *,
    model: Optional[str] = None,
) -> List[str]:
    try:
        response = await arun_agent(
            "planner",
            provider,
            PLANNER_SYSTEM_PROMPT,
            _planner_messages(request_text, kind),
            temperature=get_settings().PLANNER_TEMPERATURE,
            model=model,
        )
    except ProviderError:
        logger.warning("Planner failed; using the default plan.", exc_info=True)
        return [DEFAULT_PLAN_STEP]
    return _steps_or_default(response)
