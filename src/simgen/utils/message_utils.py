"""Utilities for converting chat messages to and from LangChain objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage


@dataclass(frozen=True)
class ChatMessage:
    """Provider-neutral chat message."""

    role: str
    content: str
    images: Sequence[str] = field(default_factory=tuple)


def _image_parts(text: str, images: Sequence[str]) -> List[Dict[str, Any]]:
    # data: URLs and http(s) URLs share the same part shape
    parts: List[Dict[str, Any]] = [
        {"type": "image_url", "image_url": {"url": image}} for image in images
    ]
    parts.append({"type": "text", "text": text})
    return parts


def _to_langchain(message: ChatMessage, images: Sequence[str]) -> BaseMessage:
    role = (message.role or "").lower()
    if role == "system":
        return SystemMessage(message.content)
    if role in {"assistant", "ai", "model"}:
        return AIMessage(message.content)
    if images:
        return HumanMessage(content=_image_parts(message.content, images))
    return HumanMessage(message.content)


def to_langchain_messages(
    system_prompt: str,
    messages: Sequence[ChatMessage],
    images: Sequence[str] = (),
) -> List[BaseMessage]:
    """Build the LangChain message list for a completion call.

    Images (the call-level ones plus any carried by individual messages) are
    attached to the final user-role message only.
    """

    attached = list(images)
    for message in messages:
        attached.extend(message.images)

    last_user = -1
    for index, message in enumerate(messages):
        if (message.role or "").lower() in {"user", "human"}:
            last_user = index

    converted: List[BaseMessage] = []
    if system_prompt:
        converted.append(SystemMessage(system_prompt))
    for index, message in enumerate(messages):
        converted.append(_to_langchain(message, attached if index == last_user else ()))
    return converted


def normalize_content(value: Any) -> str:
    """Flatten a chat model reply into plain text."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        pieces = [piece for piece in (normalize_content(part) for part in value) if piece]
        return "\n".join(pieces)
    if isinstance(value, Mapping):
        if value.get("type") not in (None, "text"):
            return ""
        return normalize_content(value.get("text") or value.get("content"))
    if hasattr(value, "content"):
        return normalize_content(getattr(value, "content"))
    return str(value)


__all__ = ["ChatMessage", "normalize_content", "to_langchain_messages"]
