"""Snapshot of conversational and character state used to resolve macros."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from rag_injector.host import HostContext

__all__ = ["MacroContext", "build_macro_context"]

DEFAULT_CHARACTER_NAME = "Assistant"
DEFAULT_USER_NAME = "User"


@dataclass(frozen=True, slots=True)
class MacroContext:
    """Read-only inputs for :func:`rag_injector.macros.resolve_macros`."""

    character_name: str = DEFAULT_CHARACTER_NAME
    user_name: str = DEFAULT_USER_NAME
    description: str = ""
    personality: str = ""
    scenario: str = ""
    history: tuple[dict[str, Any], ...] = ()
    # Pipeline-injected values; these win over same-named context values.
    extra: Mapping[str, str | None] = field(default_factory=dict)


def build_macro_context(
    host: HostContext, extra: Mapping[str, str | None] | None = None
) -> MacroContext:
    """Build a :class:`MacroContext` from the host's running transcript."""

    return MacroContext(
        character_name=host.character_name or DEFAULT_CHARACTER_NAME,
        user_name=host.user_name or DEFAULT_USER_NAME,
        description=host.description or "",
        personality=host.personality or "",
        scenario=host.scenario or "",
        history=tuple(host.history()),
        extra=MappingProxyType(dict(extra or {})),
    )
