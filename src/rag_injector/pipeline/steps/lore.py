"""
Pipeline steps that read lore from the host and keep its tagged messages current.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from rag_injector.config import core
from rag_injector.host import HostContext, build_scan_data, content_strings
from rag_injector.injection import is_auxiliary, reconcile_auxiliary
from rag_injector.pipeline.engine import PipelineContext, PipelineStep

logger = logging.getLogger(__name__)


async def scan_lore(
    host: HostContext, messages: Sequence[dict[str, Any]], *, dry_run: bool
) -> tuple[str, str]:
    """Run the host's lore lookup over ``messages``; return ``(before, after)``."""

    scan_data = build_scan_data(host.card_fields())
    max_context = host.max_context or core.DEFAULT_MAX_CONTEXT
    result = await host.lookup(content_strings(messages), max_context, dry_run, scan_data)
    result = result or {}
    return result.get("before") or "", result.get("after") or ""


class LoreScanStep(PipelineStep):
    """
    Dry-run lore scan so templates can use ``{{beforeContext}}``/``{{afterContext}}``.
    Failures here only cost the macro values; the run continues.
    """

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.host.can_scan_lore():
            logger.warning("Lore lookup not available from host, continuing without it")
            return context

        try:
            before, after = await scan_lore(context.host, context.messages, dry_run=True)
        except Exception as e:
            logger.error("Error retrieving lore: %s", e)
            return context

        context.lore_before = before
        context.lore_after = after
        logger.debug("Retrieved lore: before=%d chars, after=%d chars", len(before), len(after))
        return context


class LoreReconcileStep(PipelineStep):
    """
    Re-scans lore against the post-injection conversation and upserts the
    tagged before/after messages. Runs only when ``REPROCESS_LORE`` is set.
    """

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not core.REPROCESS_LORE:
            return context

        if not context.host.can_scan_lore():
            logger.warning("Lore lookup not available from host, skipping lore reprocessing")
            return context

        logger.info("Reprocessing lore with new context...")

        # Tagged lore messages are left out of the scan so they cannot trigger themselves.
        scan_input = [m for m in context.messages if not is_auxiliary(m)]
        try:
            before, after = await scan_lore(context.host, scan_input, dry_run=False)
        except Exception as e:
            logger.error("Error reprocessing lore: %s", e)
            return context

        reconcile_auxiliary(context.messages, before, after)
        context.lore_before = before
        context.lore_after = after
        context.step_metadata["lore_reprocessed"] = True
        logger.debug("Regenerated lore: before=%d chars, after=%d chars", len(before), len(after))
        return context
