"""Default retrieval collaborator backed by the OpenAI chat completions API."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Awaitable, Callable, Mapping

from openai import AsyncOpenAI

from rag_injector.config import core

logger = logging.getLogger(__name__)

# send(target_id, messages, max_tokens, *, tools, tool_choice) -> {"content": str} | None
RetrievalSender = Callable[..., Awaitable[Mapping[str, Any] | None]]


@lru_cache(maxsize=1)
def client() -> AsyncOpenAI:
    """Return the shared async client, created on first use."""
    return AsyncOpenAI(api_key=core.OPENAI_API_KEY)


async def send_request(
    target_id: str,
    messages: list[dict],
    max_tokens: int,
    *,
    tools: list[dict] | None = None,
    tool_choice: str | None = None,
) -> dict[str, str] | None:
    """
    Send one non-streaming completion to the retrieval model ``target_id``.

    Returns ``{"content": text}`` or ``None`` when the model produced no text.
    """
    kwargs: dict[str, Any] = {
        "model": target_id,
        "messages": messages,
        "max_tokens": max_tokens,
    }
    if tools:
        kwargs["tools"] = tools
        if tool_choice:
            kwargs["tool_choice"] = tool_choice

    resp = await client().chat.completions.create(**kwargs)
    if not resp.choices:
        return None

    content = resp.choices[0].message.content
    if not content:
        return None
    return {"content": content.strip()}
