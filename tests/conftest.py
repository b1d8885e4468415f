import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from simgen.config.settings import get_settings
from simgen.errors import ProviderError
from simgen.llm.providers import CompletionOptions, CompletionProvider
from simgen.prompts import COMMAND_LIST_RUBRIC, COMPONENT_RUBRIC, PLANNER_SYSTEM_PROMPT

COUNTER_COMPONENT = """\
export default function Counter() {
  const [count, setCount] = useState(0);
  return (
    <button onClick={() => setCount(count + 1)}>Count: {count}</button>
  );
}"""


@dataclass
class RecordedCall:
    role: str
    system_prompt: str
    messages: List[Any]
    options: CompletionOptions

    @property
    def user_content(self) -> str:
        return self.messages[-1].content if self.messages else ""


class ScriptedProvider(CompletionProvider):
    """Deterministic provider that answers each agent role from its own queue.

    Queue entries are reply strings or exceptions to raise. Planner and
    validator queues fall back to a harmless default once empty; generator
    and refiner calls must be scripted.
    """

    name = "scripted"
    default_model = "scripted-model"

    def __init__(
        self,
        *,
        planner: Optional[List[Any]] = None,
        generator: Optional[List[Any]] = None,
        validator: Optional[List[Any]] = None,
        refiner: Optional[List[Any]] = None,
        supports_vision: bool = False,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.queues: Dict[str, List[Any]] = {
            "planner": list(planner or []),
            "generator": list(generator or []),
            "validator": list(validator or []),
            "refiner": list(refiner or []),
        }
        self.defaults = {"planner": "1. Build the simulation", "validator": "VALID"}
        self.supports_vision = supports_vision
        self.calls: List[RecordedCall] = []
        self.delays = dict(delays or {})
        self.cancelled: List[str] = []

    @staticmethod
    def _role(system_prompt: str, messages) -> str:
        if system_prompt == PLANNER_SYSTEM_PROMPT:
            return "planner"
        if system_prompt in (COMPONENT_RUBRIC, COMMAND_LIST_RUBRIC):
            return "validator"
        if messages and messages[-1].content.startswith("The artifact below failed validation"):
            return "refiner"
        return "generator"

    def calls_for(self, role: str) -> List[RecordedCall]:
        return [call for call in self.calls if call.role == role]

    def complete(self, system_prompt, messages, options=None):
        role = self._role(system_prompt, messages)
        self.calls.append(RecordedCall(role, system_prompt, list(messages), options or CompletionOptions()))
        queue = self.queues[role]
        if queue:
            reply = queue.pop(0)
        elif role in self.defaults:
            reply = self.defaults[role]
        else:
            raise AssertionError(f"unexpected {role} call")
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def acomplete(self, system_prompt, messages, options=None):
        role = self._role(system_prompt, messages)
        delay = self.delays.get(role)
        if delay:
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError:
                self.cancelled.append(role)
                raise
        return self.complete(system_prompt, messages, options)


class FakeResponse:
    def __init__(self, content: Any):
        self.content = content


class FakeChatModel:
    """Stand-in for ChatOpenAI that records invocations."""

    def __init__(self, reply: Any = "ok", error: Optional[BaseException] = None):
        self.reply = reply
        self.error = error
        self.invocations: List[List[Any]] = []

    def invoke(self, messages, **kwargs):
        self.invocations.append(list(messages))
        if self.error is not None:
            raise self.error
        return FakeResponse(self.reply)

    async def ainvoke(self, messages, **kwargs):
        return self.invoke(messages, **kwargs)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Pin settings that would otherwise leak in from the environment."""
    cfg = get_settings()
    monkeypatch.setattr(cfg, "SEMANTIC_VALIDATION", True)
    monkeypatch.setattr(cfg, "LANGFUSE_PUBLIC_KEY", None)
    monkeypatch.setattr(cfg, "LANGFUSE_SECRET_KEY", None)
    monkeypatch.setattr(cfg, "LLM_API_KEY", None)
    monkeypatch.setattr(cfg, "LLM_MODEL", None)
    monkeypatch.setattr(cfg, "LLM_PROVIDER", "deepseek")
    monkeypatch.setattr(cfg, "OLLAMA_BASE_URL", "http://localhost:11434")
    monkeypatch.setattr(cfg, "TEMPERATURE", 0.7)
    monkeypatch.setattr(cfg, "PLANNER_TEMPERATURE", 0.3)
    monkeypatch.setattr(cfg, "REFINER_TEMPERATURE", 0.3)
    monkeypatch.setattr(cfg, "VALIDATOR_TEMPERATURE", 0.1)
    return cfg


@pytest.fixture
def fake_chat_model(monkeypatch):
    """Patch the chat model factory used by the adapters; returns (model, overrides log)."""
    fake = FakeChatModel()
    overrides: List[Dict[str, Any]] = []

    def _factory(**kwargs):
        overrides.append(kwargs)
        return fake

    monkeypatch.setattr("simgen.llm.providers.get_chat_model", _factory)
    return fake, overrides


@pytest.fixture
def provider_error():
    return ProviderError("scripted", "upstream unavailable")


@pytest.fixture
def scripted():
    """Factory for :class:`ScriptedProvider` instances."""
    return ScriptedProvider


@pytest.fixture
def counter_component():
    return COUNTER_COMPONENT
