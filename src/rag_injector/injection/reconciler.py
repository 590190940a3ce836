"""Upsert the identifier-tagged lore messages after the conversation changed."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

BEFORE_ID = "before-context"
AFTER_ID = "after-context"
AUXILIARY_IDS = frozenset({BEFORE_ID, AFTER_ID})
DEFAULT_ROLE = "system"

__all__ = [
    "AFTER_ID",
    "AUXILIARY_IDS",
    "BEFORE_ID",
    "is_auxiliary",
    "reconcile_auxiliary",
]


def is_auxiliary(message: dict[str, Any]) -> bool:
    return message.get("identifier") in AUXILIARY_IDS


def reconcile_auxiliary(
    messages: list[dict[str, Any]], before: str | None, after: str | None
) -> None:
    """
    Keep at most one ``before-context`` and one ``after-context`` message.

    Existing tagged messages stay where they are and keep their role (hosts
    may have squashed system roles into something else); only the content is
    refreshed. Empty content removes the tagged message. A missing tag with
    content is created with the ``system`` role: ``before`` at the front,
    ``after`` at the end. Later duplicates of a tag are dropped.

    The sequence is rebuilt and written back into ``messages`` so the caller's
    list object is preserved.
    """

    contents = {BEFORE_ID: before or "", AFTER_ID: after or ""}
    seen: set[str] = set()
    rebuilt: list[dict[str, Any]] = []

    for message in messages:
        identifier = message.get("identifier")
        if identifier not in AUXILIARY_IDS:
            rebuilt.append(message)
            continue
        if identifier in seen:
            logger.debug("Dropping duplicate %s message", identifier)
            continue
        seen.add(identifier)

        content = contents[identifier]
        if not content:
            logger.debug("Removing %s message (no content)", identifier)
            continue
        message["content"] = content
        rebuilt.append(message)

    if contents[BEFORE_ID] and BEFORE_ID not in seen:
        rebuilt.insert(0, _tagged(BEFORE_ID, contents[BEFORE_ID]))
    if contents[AFTER_ID] and AFTER_ID not in seen:
        rebuilt.append(_tagged(AFTER_ID, contents[AFTER_ID]))

    messages[:] = rebuilt


def _tagged(identifier: str, content: str) -> dict[str, Any]:
    return {"role": DEFAULT_ROLE, "content": content, "identifier": identifier}
