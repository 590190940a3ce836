"""
Tool descriptors offered to the retrieval model (and optionally the main model).

Two shapes exist:

* a function tool (:class:`ToolSpec`) that the retrieval model calls with a
  ``query``; the backend behind the retrieval profile answers it;
* a native retrieval tool built by one of the providers in
  :mod:`rag_injector.tools.providers` (Vertex AI Search, Google Search
  grounding, or custom JSON).

:func:`build_tool` picks between them from the retrieval config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

__all__ = [
    "ToolBuildError",
    "ToolSpec",
    "build_function_tool",
    "build_tool",
]


@dataclass(slots=True)
class ToolSpec:
    """Static description of a function tool exposed to the LLM."""

    name: str
    description: str
    parameters: Dict[str, Any]

    def to_openai(self) -> Dict[str, Any]:
        """Return this spec formatted for OpenAI function calling."""

        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolBuildError(ValueError):
    """Raised when the configured tool cannot be built (malformed config)."""

    pass


def build_function_tool(cfg) -> Dict[str, Any]:
    """Return the ``search_knowledge_base``-style function tool."""

    spec = ToolSpec(
        name=cfg.TOOL_NAME,
        description=cfg.TOOL_DESCRIPTION,
        parameters={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query to find relevant information",
                },
                "max_results": {
                    "type": "number",
                    "description": f"Maximum number of results to return (default: {cfg.MAX_RESULTS})",
                },
            },
            "required": ["query"],
        },
    )
    return spec.to_openai()


def build_tool(cfg) -> Dict[str, Any]:
    """Build the native retrieval tool or the function tool, per ``cfg``."""

    if cfg.USE_NATIVE_RETRIEVAL:
        from .providers import build_retrieval_tool

        return build_retrieval_tool(cfg)
    return build_function_tool(cfg)
