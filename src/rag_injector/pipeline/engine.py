"""
Core engine for the context-injection pipeline.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from rag_injector.host import ChatRequest, HostContext

if TYPE_CHECKING:
    from rag_injector.clients.oai import RetrievalSender
    from rag_injector.injection import InjectionPlan
    from rag_injector.pipeline.tracer import PipelineTracer

logger = logging.getLogger(__name__)


@dataclass
class PipelineContext:
    """
    Holds the state of one injection run.
    """
    # The outbound request; its message list is mutated in place.
    request: ChatRequest

    # Host snapshot (transcript, character fields, lore collaborator).
    host: HostContext

    # Retrieval collaborator used by RetrievalStep.
    send: RetrievalSender

    # Lore blocks from the host's lookup. Filled by LoreScanStep, refreshed by LoreReconcileStep.
    lore_before: str = ""
    lore_after: str = ""

    # Tool descriptor sent with the retrieval request.
    retrieval_tool: dict[str, Any] | None = None

    # Text returned by the retrieval model.
    rag_response: str = ""

    # Resolved injection text and where it went.
    injection_content: str = ""
    injection_plan: InjectionPlan | None = None

    # Set by a step to stop the remaining steps without an error.
    halted: bool = False
    halt_reason: str | None = None

    # Free-form data recorded by steps for the tracer.
    step_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def messages(self) -> list[dict[str, Any]]:
        return self.request.messages

    def lore_values(self) -> dict[str, str]:
        """Lore blocks exposed to templates as ``{{beforeContext}}``/``{{afterContext}}``."""
        return {"beforeContext": self.lore_before, "afterContext": self.lore_after}

    def halt(self, reason: str) -> None:
        self.halted = True
        self.halt_reason = reason


class PipelineStep(ABC):
    """
    Abstract base class for a single step in the pipeline.
    """

    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        """
        Execute the step logic.

        Args:
            context: The current pipeline context.

        Returns:
            The updated pipeline context.
        """
        pass


class InjectionPipeline:
    """
    Runs steps in order until one halts or raises.
    """

    def __init__(self, steps: list[PipelineStep], tracer: PipelineTracer | None = None):
        self.steps = steps
        self.tracer = tracer

    async def run(self, context: PipelineContext) -> PipelineContext:
        """
        Run all steps in order and return the final context.
        """
        current_context = context
        if self.tracer:
            self.tracer.capture("Start", current_context)

        for i, step in enumerate(self.steps):
            step_name = step.__class__.__name__
            logger.debug("Running pipeline step %d: %s", i + 1, step_name)

            try:
                current_context = await step.run(current_context)
            except Exception as e:
                logger.error("Pipeline step %s failed: %s", step_name, e)
                raise
            finally:
                if self.tracer:
                    self.tracer.capture(step_name, current_context)

            if current_context.halted:
                logger.debug(
                    "Pipeline halted after %s: %s", step_name, current_context.halt_reason
                )
                break

        return current_context
