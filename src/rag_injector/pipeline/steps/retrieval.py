"""
Pipeline step that asks the retrieval model for context.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from rag_injector.config import core, retrieval
from rag_injector.macros import build_macro_context, resolve_macros
from rag_injector.pipeline.engine import PipelineContext, PipelineStep
from rag_injector.tools import ToolBuildError, build_tool

logger = logging.getLogger(__name__)


def extract_content(result: Any) -> str:
    """Return the text of a retrieval result, or ``""`` when there is none."""

    if isinstance(result, Mapping):
        content = result.get("content")
        if isinstance(content, str):
            return content
    return ""


class RetrievalStep(PipelineStep):
    """
    Sends a system instruction plus a macro-resolved query, with one retrieval
    tool attached, to the configured retrieval profile. Halts when the tool
    cannot be built or when nothing comes back.
    """

    async def run(self, context: PipelineContext) -> PipelineContext:
        try:
            tool = build_tool(retrieval)
        except ToolBuildError as e:
            logger.error("Failed to build retrieval tool, skipping: %s", e)
            context.halt("tool build failed")
            return context

        macro_context = build_macro_context(context.host, context.lore_values())
        system_prompt = resolve_macros(retrieval.SYSTEM_PROMPT, macro_context)
        user_prompt = resolve_macros(retrieval.USER_PROMPT_TEMPLATE, macro_context)
        logger.debug("Resolved RAG query (%d chars): %s", len(user_prompt), user_prompt[:500])

        rag_messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        tool_choice = "required" if retrieval.TOOL_CHOICE == "required" else "auto"

        logger.info(
            "Sending RAG request to profile %s with tool: %s",
            core.RAG_PROFILE_ID,
            json.dumps(tool),
        )
        result = await context.send(
            core.RAG_PROFILE_ID,
            rag_messages,
            retrieval.MAX_TOKENS,
            tools=[tool],
            tool_choice=tool_choice,
        )

        rag_response = extract_content(result)
        if not rag_response:
            logger.debug("No RAG response content, continuing without injection")
            context.halt("empty retrieval result")
            return context

        context.retrieval_tool = tool
        context.rag_response = rag_response
        context.step_metadata["rag_response_chars"] = len(rag_response)
        return context
