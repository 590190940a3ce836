"""
Host-side objects the injector receives when a request is about to be sent.

The host application owns the request and its running chat transcript; the
injector only reads :class:`HostContext` and mutates :class:`ChatRequest` in
place. Two collaborators are reached through the host:

* ``lookup`` - the lore scanner, an async callable
  ``lookup(content_strings, max_context, is_dry_run, scan_data)`` returning a
  mapping with ``before`` and ``after`` text blocks.
* ``card_fields`` - a callable returning the active character-card fields
  used as scan data for ``lookup``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Mapping, Protocol, Sequence


class LoreLookup(Protocol):
    def __call__(
        self,
        content_strings: list[str],
        max_context: int,
        is_dry_run: bool,
        scan_data: dict[str, Any],
    ) -> Awaitable[Mapping[str, Any]]: ...


@dataclass(slots=True)
class ChatRequest:
    """The outbound chat-completion payload, shared by reference with the host."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    tools: list[dict[str, Any]] | None = None
    tool_choice: str | None = None


@dataclass(slots=True)
class HostContext:
    """Read-only snapshot of host state for one pipeline run."""

    character_name: str | None = None
    user_name: str | None = None
    description: str = ""
    personality: str = ""
    scenario: str = ""

    # Running transcript in host format: {"mes", "is_user", "is_system", "name", "extra"}.
    chat: list[dict[str, Any]] = field(default_factory=list)

    # Connection profile of the outer request, checked by the profile filter.
    selected_profile: str | None = None
    max_context: int | None = None

    lookup: LoreLookup | None = None
    card_fields: Callable[[], Mapping[str, Any]] | None = None

    def history(self) -> list[dict[str, Any]]:
        """Return the running transcript as chat-completion messages."""

        return convert_transcript(self.chat)

    def can_scan_lore(self) -> bool:
        return self.lookup is not None and self.card_fields is not None


def convert_transcript(entries: Iterable[Mapping[str, Any]] | None) -> list[dict[str, Any]]:
    """Translate host transcript entries to ``{"role", "content"}`` messages."""

    if entries is None:
        return []

    converted: list[dict[str, Any]] = []
    for entry in entries:
        role = "assistant"
        if entry.get("is_user"):
            role = "user"
        elif entry.get("is_system"):
            role = "system"

        message: dict[str, Any] = {"role": role, "content": entry.get("mes") or ""}
        if entry.get("name"):
            message["name"] = entry["name"]

        signatures = (entry.get("extra") or {}).get("thought_signatures")
        if signatures:
            message["thought_signatures"] = signatures

        converted.append(message)
    return converted


def content_strings(messages: Sequence[Mapping[str, Any]]) -> list[str]:
    """Flatten message content to plain strings for the lore scanner."""

    strings: list[str] = []
    for message in messages:
        content = message.get("content")
        if isinstance(content, str):
            strings.append(content)
        elif isinstance(content, list):
            strings.append(
                "\n".join(
                    (part.get("text") or "") if isinstance(part, Mapping) else ""
                    for part in content
                )
            )
        else:
            strings.append("")
    return strings


def build_scan_data(card_fields: Mapping[str, Any]) -> dict[str, Any]:
    """Extend the host's card fields with the aliases the scanner expects."""

    return {
        **card_fields,
        "persona_description": card_fields.get("persona"),
        "character_description": card_fields.get("description"),
        "character_personality": card_fields.get("personality"),
        "character_depth_prompt": card_fields.get("char_depth_prompt"),
        "trigger": "normal",
    }


__all__ = [
    "ChatRequest",
    "HostContext",
    "LoreLookup",
    "build_scan_data",
    "content_strings",
    "convert_transcript",
]
