"""Template macros resolved against conversation and character state."""

from .context import MacroContext, build_macro_context
from .resolver import resolve_macros
from .slicing import format_messages, format_slice

__all__ = [
    "MacroContext",
    "build_macro_context",
    "format_messages",
    "format_slice",
    "resolve_macros",
]
