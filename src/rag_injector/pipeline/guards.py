"""Preconditions checked before a run touches the request."""

from __future__ import annotations

from rag_injector.config import core, retrieval
from rag_injector.host import HostContext
from rag_injector.tools.providers import missing_requirement

from .lock import SingleFlightLock

__all__ = ["check_guards"]


def check_guards(host: HostContext, lock: SingleFlightLock) -> str | None:
    """
    Return why this run should be skipped, or ``None`` when it may proceed.

    A rejection is an expected outcome, not an error: the caller logs the
    reason and leaves the request untouched.
    """

    if not core.ENABLED:
        return "Extension disabled"

    if lock.held:
        return "Already processing RAG"

    if not core.RAG_PROFILE_ID:
        return "No RAG profile selected"

    if core.FILTER_BY_PROFILE and core.FILTER_PROFILE_ID:
        if host.selected_profile != core.FILTER_PROFILE_ID:
            return "Profile filter mismatch"

    return missing_requirement(retrieval)
