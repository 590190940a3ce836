"""
Pipeline step for the optional finishing touches on the outer request.
"""
from __future__ import annotations

import logging

from rag_injector.config import core, retrieval
from rag_injector.pipeline.engine import PipelineContext, PipelineStep
from rag_injector.tools import ToolBuildError, build_tool

logger = logging.getLogger(__name__)


class FinishStep(PipelineStep):
    """
    Appends ``SYSTEM_PROMPT_ADDITION`` to the first system message and, when
    enabled, grants the main model the retrieval tool.
    """

    async def run(self, context: PipelineContext) -> PipelineContext:
        if core.SYSTEM_PROMPT_ADDITION:
            self._extend_system_prompt(context)

        if retrieval.MAIN_MODEL_TOOLS:
            self._grant_tool(context)

        logger.debug("RAG injection complete")
        return context

    def _extend_system_prompt(self, context: PipelineContext) -> None:
        system_message = next((m for m in context.messages if m.get("role") == "system"), None)
        if system_message is None or not isinstance(system_message.get("content"), str):
            return
        system_message["content"] += "\n\n" + core.SYSTEM_PROMPT_ADDITION

    def _grant_tool(self, context: PipelineContext) -> None:
        try:
            tool = build_tool(retrieval)
        except ToolBuildError as e:
            logger.error("Failed to build main model tool: %s", e)
            return

        request = context.request
        if request.tools is None:
            request.tools = []
        request.tools.append(tool)

        # "auto" is the API default, so only a stricter choice is written.
        if retrieval.MAIN_MODEL_TOOL_CHOICE != "auto":
            request.tool_choice = retrieval.MAIN_MODEL_TOOL_CHOICE

        logger.debug(
            "Added retrieval tool to main model request with tool_choice: %s",
            retrieval.MAIN_MODEL_TOOL_CHOICE,
        )
