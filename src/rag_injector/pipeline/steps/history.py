"""
Pipeline step that repairs requests delivered without chat history.
"""
from __future__ import annotations

import logging

from rag_injector.macros.slicing import chat_messages
from rag_injector.pipeline.engine import PipelineContext, PipelineStep

logger = logging.getLogger(__name__)


class HistoryRepairStep(PipelineStep):
    """
    Appends the host transcript when the request carries only system messages.

    Some host paths hand over the request before the chat turns are filled in;
    the macros and the injection planner both need them.
    """

    async def run(self, context: PipelineContext) -> PipelineContext:
        history = context.host.history()
        if not history:
            return context

        if chat_messages(context.messages):
            return context

        logger.info("Detected missing chat history in request. Reconstructing from host transcript...")
        restored = chat_messages(history)
        context.messages.extend(restored)
        logger.info("Reconstructed %d messages.", len(restored))

        context.step_metadata["restored_messages"] = len(restored)
        return context
