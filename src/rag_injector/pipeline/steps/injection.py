"""
Pipeline step that places the retrieved context into the request.
"""
from __future__ import annotations

import logging

from rag_injector.config import injection
from rag_injector.injection import apply_injection
from rag_injector.macros import build_macro_context, resolve_macros
from rag_injector.pipeline.engine import PipelineContext, PipelineStep

logger = logging.getLogger(__name__)


class InjectionStep(PipelineStep):
    """
    Resolves the injection template and merges or inserts it at the
    configured position. An empty request is left alone and ends the run.
    """

    async def run(self, context: PipelineContext) -> PipelineContext:
        extra = {**context.lore_values(), "ragResponse": context.rag_response}
        content = resolve_macros(injection.TEMPLATE, build_macro_context(context.host, extra))
        context.injection_content = content

        if not context.messages:
            logger.info("Request has no messages, skipping injection")
            context.halt("empty conversation")
            return context

        spec = injection.spec()
        plan = apply_injection(context.messages, content, spec)
        context.injection_plan = plan

        if plan.merge_target is not None:
            logger.debug("Merged RAG context into existing %s message at index %d", spec.role, plan.merge_target)
        else:
            logger.debug("Inserted RAG context as %s at index %d", spec.role, plan.index)
        return context
