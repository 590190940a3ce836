"""Native retrieval tool builders, one per supported provider.

The backend extracts provider settings via ``tool[tool["type"]]`` so every
descriptor carries a ``type`` key naming its payload key.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from . import ToolBuildError

logger = logging.getLogger(__name__)

PROVIDER_NAMES = {
    "vertexAiSearch": "Vertex AI Search",
    "googleSearch": "Google Search (Grounding)",
    "custom": "Custom (JSON)",
}

__all__ = ["PROVIDER_NAMES", "build_retrieval_tool", "missing_requirement"]


def build_retrieval_tool(cfg) -> Dict[str, Any]:
    provider = cfg.PROVIDER
    if provider == "vertexAiSearch":
        return {
            "type": "retrieval",
            "retrieval": {"vertexAiSearch": {"datastore": cfg.DATASTORE_ID}},
        }
    if provider == "googleSearch":
        return {"type": "googleSearch", "googleSearch": {}}
    if provider == "custom":
        return _parse_custom(cfg.CUSTOM_RETRIEVAL_JSON)
    raise ToolBuildError(f"Unknown retrieval provider: {provider!r}")


def missing_requirement(cfg) -> str | None:
    """Return what the selected provider still needs, or ``None`` when ready."""

    if not cfg.USE_NATIVE_RETRIEVAL:
        return None
    if cfg.PROVIDER != "googleSearch" and not cfg.DATASTORE_ID:
        return "No datastore ID configured for native retrieval"
    if cfg.PROVIDER == "custom" and not cfg.CUSTOM_RETRIEVAL_JSON:
        return "No custom retrieval JSON configured"
    return None


def _parse_custom(raw: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ToolBuildError(f"Invalid custom retrieval JSON: {exc}") from exc

    if not isinstance(parsed, dict) or not parsed:
        raise ToolBuildError("Custom retrieval JSON must be a non-empty object")

    if not parsed.get("type"):
        parsed["type"] = next(iter(parsed))
        logger.debug("Custom retrieval tool has no type; using %r", parsed["type"])
    return parsed
