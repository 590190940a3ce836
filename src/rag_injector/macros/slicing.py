"""Render slices of a conversation as readable text blocks."""

from __future__ import annotations

import json
from typing import Any, Sequence

__all__ = ["chat_messages", "format_messages", "format_slice"]


def chat_messages(messages: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return ``messages`` without system entries, order preserved."""

    return [m for m in messages if m.get("role") != "system"]


def format_messages(messages: Sequence[dict[str, Any]]) -> str:
    """Render messages as ``Role: content`` entries separated by a blank line."""

    rendered: list[str] = []
    for message in messages:
        label = "User" if message.get("role") == "user" else "Assistant"
        content = message.get("content")
        if not isinstance(content, str):
            content = json.dumps(content, ensure_ascii=False)
        rendered.append(f"{label}: {content}")
    return "\n\n".join(rendered)


def format_slice(
    messages: Sequence[dict[str, Any]], start: int, end: int | None = None
) -> str:
    """
    Format the half-open slice ``[start, end)`` of the non-system messages.

    Negative indices count from the end. A negative ``start`` reaching past
    the beginning clamps to ``0`` so ``{{messages:-10}}`` on a short chat
    still yields the whole chat. ``end=None`` runs through the last message.
    """

    chat = chat_messages(messages)
    length = len(chat)

    if start < 0 and abs(start) > length:
        start = 0
    lo = _normalize(start, length)
    hi = length if end is None else _normalize(end, length)

    if lo >= hi:
        return ""
    return format_messages(chat[lo:hi])


def _normalize(index: int, length: int) -> int:
    if index < 0:
        index += length
    return max(0, min(length, index))
