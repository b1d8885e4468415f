"""State graph driving plan -> generate -> (validate -> refine)* for one request."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Union

from langchain_core.runnables import RunnableConfig, RunnableLambda
from langgraph.graph import END, START, StateGraph

from simgen.agent.generator import agenerate_candidate, generate_candidate
from simgen.agent.planner import aplan_steps, plan_steps
from simgen.agent.refiner import arefine_candidate, refine_candidate
from simgen.agent.semantic_validator import avalidate_semantics, validate_semantics
from simgen.agent.state import (
    MAX_ATTEMPTS,
    ArtifactKind,
    GenerationContext,
    GenerationResult,
    Outcome,
    ValidationVerdict,
)
from simgen.agent.syntax_validator import validate_local
from simgen.config.settings import get_settings
from simgen.errors import GenerationError, ProviderError
from simgen.llm.providers import CompletionProvider, get_provider
from simgen.utils.telemetry import get_trace_callbacks

logger = logging.getLogger(__name__)

ProviderLike = Union[CompletionProvider, str, None]


def _runtime(config: RunnableConfig) -> Dict[str, Any]:
    return (config or {}).get("configurable") or {}


def _plan_update(plan: List[str]) -> Dict[str, Any]:
    logger.debug("Plan generated: %s", plan)
    return {"plan": plan}


def planning_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    plan = plan_steps(
        state["request_text"],
        state["artifact_kind"],
        runtime["provider"],
        model=runtime.get("model"),
    )
    return _plan_update(plan)


async def aplanning_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    plan = await aplan_steps(
        state["request_text"],
        state["artifact_kind"],
        runtime["provider"],
        model=runtime.get("model"),
    )
    return _plan_update(plan)


def generating_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    candidate = generate_candidate(
        state["request_text"],
        state["artifact_kind"],
        state.get("plan") or [],
        runtime["provider"],
        model=runtime.get("model"),
        temperature=runtime.get("temperature"),
        images=state.get("images") or (),
    )
    return {"candidate": candidate, "defects": [], "attempt_count": 0}


async def agenerating_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    candidate = await agenerate_candidate(
        state["request_text"],
        state["artifact_kind"],
        state.get("plan") or [],
        runtime["provider"],
        model=runtime.get("model"),
        temperature=runtime.get("temperature"),
        images=state.get("images") or (),
    )
    return {"candidate": candidate, "defects": [], "attempt_count": 0}


def _verdict_update(state: GenerationContext, verdict: ValidationVerdict) -> Dict[str, Any]:
    if verdict.accepted:
        return {"defects": [], "outcome": Outcome.ACCEPTED, "unverified": verdict.inconclusive}

    defects = list(verdict.defects)
    update: Dict[str, Any] = {"defects": defects, "defect_history": [defects]}
    if state.get("attempt_count", 0) >= MAX_ATTEMPTS:
        update["outcome"] = Outcome.ATTEMPTS_EXHAUSTED
    return update


def validating_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    candidate = state.get("candidate") or ""
    kind = state["artifact_kind"]

    verdict = validate_local(candidate, kind)
    if verdict.accepted and get_settings().SEMANTIC_VALIDATION:
        verdict = validate_semantics(candidate, kind, runtime["provider"], model=runtime.get("model"))
    return _verdict_update(state, verdict)


async def avalidating_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    candidate = state.get("candidate") or ""
    kind = state["artifact_kind"]

    verdict = validate_local(candidate, kind)
    if verdict.accepted and get_settings().SEMANTIC_VALIDATION:
        verdict = await avalidate_semantics(candidate, kind, runtime["provider"], model=runtime.get("model"))
    return _verdict_update(state, verdict)


def _refinement_failed(attempt: int) -> Dict[str, Any]:
    logger.warning("Refiner failed on attempt %d; keeping the previous candidate.", attempt, exc_info=True)
    return {"attempt_count": attempt, "outcome": Outcome.ATTEMPTS_EXHAUSTED}


def refining_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    attempt = state.get("attempt_count", 0) + 1
    defects = state.get("defects") or []
    logger.info("Refining candidate attempt=%d defects=%s", attempt, defects)

    try:
        candidate = refine_candidate(
            state.get("candidate") or "",
            defects,
            state["artifact_kind"],
            runtime["provider"],
            model=runtime.get("model"),
            generator_temperature=runtime.get("temperature"),
        )
    except ProviderError:
        return _refinement_failed(attempt)
    return {"candidate": candidate, "defects": [], "attempt_count": attempt}


async def arefining_node(state: GenerationContext, config: RunnableConfig) -> Dict[str, Any]:
    runtime = _runtime(config)
    attempt = state.get("attempt_count", 0) + 1
    defects = state.get("defects") or []
    logger.info("Refining candidate attempt=%d defects=%s", attempt, defects)

    try:
        candidate = await arefine_candidate(
            state.get("candidate") or "",
            defects,
            state["artifact_kind"],
            runtime["provider"],
            model=runtime.get("model"),
            generator_temperature=runtime.get("temperature"),
        )
    except ProviderError:
        return _refinement_failed(attempt)
    return {"candidate": candidate, "defects": [], "attempt_count": attempt}


def route_after_validation(state: GenerationContext) -> str:
    """Finish once an outcome is recorded, otherwise refine."""
    return "done" if state.get("outcome") else "refining"


def route_after_refinement(state: GenerationContext) -> str:
    return "done" if state.get("outcome") else "validating"


def _make_graph():
    g = StateGraph(GenerationContext)

    # sync bodies serve invoke(), async bodies serve ainvoke()
    g.add_node("planning", RunnableLambda(planning_node, afunc=aplanning_node))
    g.add_node("generating", RunnableLambda(generating_node, afunc=agenerating_node))
    g.add_node("validating", RunnableLambda(validating_node, afunc=avalidating_node))
    g.add_node("refining", RunnableLambda(refining_node, afunc=arefining_node))

    g.add_edge(START, "planning")
    g.add_edge("planning", "generating")
    g.add_edge("generating", "validating")
    g.add_conditional_edges(
        "validating",
        route_after_validation,
        {"refining": "refining", "done": END},
    )
    g.add_conditional_edges(
        "refining",
        route_after_refinement,
        {"validating": "validating", "done": END},
    )
    return g.compile()


graph = _make_graph()


def _resolve_provider(provider: ProviderLike, api_key: Optional[str]) -> CompletionProvider:
    if isinstance(provider, CompletionProvider):
        return provider
    return get_provider(provider, api_key)


def _initial_state(
    request_text: str, kind: ArtifactKind, images: Optional[Sequence[str]]
) -> GenerationContext:
    return {
        "request_text": request_text,
        "artifact_kind": kind,
        "started_at": time.monotonic(),
        "images": list(images or []),
        "plan": [],
        "candidate": None,
        "defects": [],
        "defect_history": [],
        "attempt_count": 0,
        "outcome": None,
        "unverified": False,
    }


def _run_config(
    provider: CompletionProvider, model: Optional[str], temperature: Optional[float]
) -> RunnableConfig:
    return {
        "configurable": {"provider": provider, "model": model, "temperature": temperature},
        "callbacks": get_trace_callbacks(),
        "run_name": "simgen.generate_artifact",
    }


def _to_result(final: Dict[str, Any], kind: ArtifactKind) -> GenerationResult:
    duration_ms = int((time.monotonic() - final["started_at"]) * 1000)
    outcome = final.get("outcome") or Outcome.ATTEMPTS_EXHAUSTED
    attempts = min(int(final.get("attempt_count", 0)), MAX_ATTEMPTS)
    result = GenerationResult(
        artifact=final.get("candidate") or "",
        plan=tuple(final.get("plan") or ()),
        attempts=attempts,
        duration_ms=duration_ms,
        artifact_kind=kind,
        outcome=outcome,
        unverified=bool(final.get("unverified")),
        defect_history=tuple(tuple(defects) for defects in final.get("defect_history") or ()),
    )
    if outcome is Outcome.ACCEPTED:
        logger.info("Generation pipeline completed attempts=%d duration_ms=%d", attempts, duration_ms)
    else:
        logger.warning(
            "Generation pipeline stopped without an accepted artifact attempts=%d duration_ms=%d",
            attempts,
            duration_ms,
        )
    return result


def generate_artifact(
    request_text: str,
    artifact_kind: Union[ArtifactKind, str],
    provider: ProviderLike = None,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    images: Optional[Sequence[str]] = None,
    api_key: Optional[str] = None,
) -> GenerationResult:
    """Run the full pipeline for one request.

    ``provider`` is an adapter instance or a provider identifier (``None``
    selects the configured default). Returns the accepted artifact, or the
    last candidate once the refine attempts run out. Raises
    :class:`GenerationError` when the first generation call fails.
    """

    kind = ArtifactKind(artifact_kind)
    resolved = _resolve_provider(provider, api_key)
    logger.info("Generation pipeline started kind=%s request=%r", kind.value, request_text[:100])

    try:
        final = graph.invoke(
            _initial_state(request_text, kind, images),
            config=_run_config(resolved, model, temperature),
        )
    except ProviderError as exc:
        logger.error("Generation pipeline aborted: %s", exc)
        raise GenerationError(f"Artifact generation failed: {exc.message}") from exc
    return _to_result(final, kind)


async def agenerate_artifact(
    request_text: str,
    artifact_kind: Union[ArtifactKind, str],
    provider: ProviderLike = None,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    images: Optional[Sequence[str]] = None,
    api_key: Optional[str] = None,
) -> GenerationResult:
    """Async variant of :func:`generate_artifact` for event-loop callers.

    Provider calls are awaited directly, so cancelling the calling task
    cancels whichever request is in flight.
    """

    kind = ArtifactKind(artifact_kind)
    resolved = _resolve_provider(provider, api_key)
    logger.info("Generation pipeline started kind=%s request=%r", kind.value, request_text[:100])

    try:
        final = await graph.ainvoke(
            _initial_state(request_text, kind, images),
            config=_run_config(resolved, model, temperature),
        )
    except ProviderError as exc:
        logger.error("Generation pipeline aborted: %s", exc)
        raise GenerationError(f"Artifact generation failed: {exc.message}") from exc
    return _to_result(final, kind)


__all__ = [
    "agenerate_artifact",
    "generate_artifact",
    "graph",
    "route_after_refinement",
    "route_after_validation",
]
