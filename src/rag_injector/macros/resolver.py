"""
Macro resolution for prompt and injection templates.

Two passes run over the template:

1. ``{{key}}`` tokens are replaced from the merged key table (context-derived
   values first, ``MacroContext.extra`` on top). The table is applied in a
   single regex pass so a replacement value is never scanned again.
2. Parametric tokens ``{{lastNMessages:N}}`` and ``{{messages:START[:END]}}``
   render slices of the non-system history.

Unknown keys and malformed parametric bodies stay in the output verbatim.
"""

from __future__ import annotations

import json
import re
from typing import Any, Sequence

from .context import MacroContext
from .slicing import chat_messages, format_messages, format_slice

__all__ = ["resolve_macros", "base_variables"]

RECENT_HISTORY_COUNT = 10

_KEY_RE = re.compile(r"\{\{([^{}]+)\}\}")
_LAST_N_RE = re.compile(r"\{\{lastNMessages:(\d+)\}\}")
_SLICE_RE = re.compile(r"\{\{messages:(-?\d+)(?::(-?\d+))?\}\}")


def resolve_macros(template: str | None, context: MacroContext) -> str:
    """Return ``template`` with every recognised macro substituted."""

    if not template:
        return ""

    history = context.history
    variables = {**base_variables(context), **context.extra}

    def _replace_key(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        value = variables[key]
        return str(value) if value else ""

    result = _KEY_RE.sub(_replace_key, template)
    result = _LAST_N_RE.sub(
        lambda m: format_slice(history, -int(m.group(1))), result
    )
    result = _SLICE_RE.sub(
        lambda m: format_slice(
            history,
            int(m.group(1)),
            int(m.group(2)) if m.group(2) is not None else None,
        ),
        result,
    )
    return result


def base_variables(context: MacroContext) -> dict[str, str]:
    """Context-derived values for the plain ``{{key}}`` macros."""

    history = context.history
    return {
        "lastMessage": _last_user_message(history),
        "recentHistory": format_slice(history, -RECENT_HISTORY_COUNT),
        "fullHistory": format_messages(chat_messages(history)),
        "characterName": context.character_name,
        "char": context.character_name,
        "Char": context.character_name,
        "userName": context.user_name,
        "user": context.user_name,
        "User": context.user_name,
        "description": context.description,
        "personality": context.personality,
        "scenario": context.scenario,
    }


def _last_user_message(history: Sequence[dict[str, Any]]) -> str:
    for message in reversed(history):
        if message.get("role") == "user":
            content = message.get("content")
            if content and not isinstance(content, str):
                return json.dumps(content, ensure_ascii=False)
            return content or ""
    return ""
