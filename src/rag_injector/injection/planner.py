"""
Placement of the retrieved-context message inside a conversation.

Coordinates:

* ``position="start"`` targets the first non-system message (the start of
  the chat proper), or the end when every message is a system message.
* ``position="depth"`` counts from the end: ``0`` appends, ``-1`` inserts
  before the last message, ``-2`` before the one prior, clamped to the start.

With ``merge`` enabled the planner looks at exactly one neighbour (the
message at the target index, or the one before it when the target is the
end) and merges into it when the roles match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Sequence

__all__ = [
    "InjectionPlan",
    "InjectionSpec",
    "POSITIONS",
    "ROLES",
    "apply_injection",
    "plan_injection",
]

Role = Literal["system", "user", "assistant"]
Position = Literal["start", "depth"]

ROLES: tuple[str, ...] = ("system", "user", "assistant")
POSITIONS: tuple[str, ...] = ("start", "depth")


@dataclass(frozen=True, slots=True)
class InjectionSpec:
    """Where and as which role injected content lands."""

    role: Role = "assistant"
    position: Position = "depth"
    depth: int = -1  # only read when position == "depth"
    merge: bool = False


@dataclass(frozen=True, slots=True)
class InjectionPlan:
    index: int
    merge_target: int | None = None

    @property
    def merges(self) -> bool:
        return self.merge_target is not None


def plan_injection(messages: Sequence[dict[str, Any]], spec: InjectionSpec) -> InjectionPlan:
    """Compute the splice index and whether to merge instead of inserting."""

    length = len(messages)
    if spec.position == "start":
        index = _first_chat_index(messages)
    else:
        index = max(0, min(length, length + spec.depth))

    if spec.merge and index > 0:
        candidate = index if index < length else index - 1
        existing = messages[candidate]
        if existing.get("role") == spec.role and isinstance(existing.get("content"), str):
            return InjectionPlan(index=index, merge_target=candidate)

    return InjectionPlan(index=index)


def apply_injection(
    messages: list[dict[str, Any]], content: str, spec: InjectionSpec
) -> InjectionPlan:
    """Merge ``content`` into a neighbour or insert it as a new message, in place."""

    plan = plan_injection(messages, spec)
    if plan.merge_target is not None:
        target = messages[plan.merge_target]
        target["content"] = target["content"] + "\n\n" + content
    else:
        messages.insert(plan.index, {"role": spec.role, "content": content})
    return plan


def _first_chat_index(messages: Sequence[dict[str, Any]]) -> int:
    for i, message in enumerate(messages):
        if message.get("role") != "system":
            return i
    return len(messages)
