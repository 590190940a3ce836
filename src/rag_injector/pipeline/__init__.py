"""Entry point the host calls when a chat-completion request is about to be sent."""

from __future__ import annotations

import logging

from rag_injector.clients import oai
from rag_injector.config import core
from rag_injector.host import ChatRequest, HostContext
from rag_injector.pipeline.engine import InjectionPipeline, PipelineContext, PipelineStep
from rag_injector.pipeline.guards import check_guards
from rag_injector.pipeline.lock import SingleFlightLock
from rag_injector.pipeline.steps import default_steps
from rag_injector.pipeline.tracer import PipelineTracer

logger = logging.getLogger(__name__)

# Shared by every run in this process unless a caller supplies its own.
_LOCK = SingleFlightLock()


async def handle(
    request: ChatRequest,
    host: HostContext,
    *,
    send: oai.RetrievalSender | None = None,
    lock: SingleFlightLock | None = None,
    steps: list[PipelineStep] | None = None,
) -> PipelineContext | None:
    """
    Inject retrieved context into ``request`` in place.

    Returns the finished :class:`PipelineContext`, or ``None`` when a guard
    skipped the run. Collaborator failures are logged, never raised; whatever
    the request looked like when the failure happened is what the host sends.
    """

    if lock is None:
        lock = _LOCK

    logger.info("Chat completion request ready, checking RAG injection")
    reason = check_guards(host, lock)
    if reason:
        logger.info("%s, skipping", reason)
        return None

    with lock.acquire() as acquired:
        if not acquired:
            logger.info("Already processing RAG, skipping")
            return None

        logger.info("Starting RAG request to profile: %s", core.RAG_PROFILE_ID)
        context = PipelineContext(
            request=request,
            host=host,
            send=send or oai.send_request,
        )
        pipeline = InjectionPipeline(
            steps if steps is not None else default_steps(),
            tracer=PipelineTracer() if core.DEBUG_MODE else None,
        )

        try:
            await pipeline.run(context)
        except Exception as e:
            logger.error("RAG request failed: %s", e)
            if e.__cause__ is not None:
                logger.error("Caused by: %s", e.__cause__)

        return context


__all__ = ["handle", "PipelineContext", "SingleFlightLock"]
