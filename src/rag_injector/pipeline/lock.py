"""Single-flight guard shared by overlapping pipeline runs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class SingleFlightLock:
    """
    Lets at most one pipeline run proceed at a time.

    The retrieval request can itself raise the host's "about to send" event;
    the nested run sees the lock held and is skipped, never queued. Runs share
    one event loop, so checking and setting the flag cannot interleave.
    """

    def __init__(self) -> None:
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    @contextmanager
    def acquire(self) -> Iterator[bool]:
        """Yield ``True`` when acquired (released on exit), else ``False``."""

        if self._held:
            yield False
            return

        self._held = True
        try:
            yield True
        finally:
            self._held = False


__all__ = ["SingleFlightLock"]
