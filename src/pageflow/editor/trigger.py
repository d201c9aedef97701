"""Debounced reflow scheduling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class LayoutTrigger:
    """Schedules a reflow shortly after edits, latest edit wins.

    Every ``schedule`` call replaces the pending task, so a burst of
    keystrokes produces one pass. The earliest affected page index across
    the burst is kept. While the callback runs, ``reflowing`` is set and
    further notifications are dropped: the pass mutates the very pages it
    observes.

    Outside a running event loop the callback runs synchronously.
    """

    def __init__(self, callback: Callable[[int], Any], delay: float = 0.01) -> None:
        self.callback = callback
        self.delay = delay
        self.reflowing = False
        self.suppressed = 0
        self.runs = 0
        self._pending: asyncio.Task | None = None
        self._start: int | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def schedule(self, start_index: int = 0) -> None:
        if self.reflowing:
            self.suppressed += 1
            return
        self._start = start_index if self._start is None else min(self._start, start_index)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.run_now()
            return
        self.cancel()
        self._pending = loop.create_task(self._deferred())

    async def _deferred(self) -> None:
        await asyncio.sleep(self.delay)
        self._pending = None
        self.run_now()

    def run_now(self, start_index: int | None = None) -> Any:
        """Run the callback immediately, absorbing any pending request."""
        if self.reflowing:
            self.suppressed += 1
            return None
        self.cancel()
        start = self._start if start_index is None else start_index
        self._start = None
        self.reflowing = True
        try:
            self.runs += 1
            return self.callback(start or 0)
        finally:
            self.reflowing = False

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        """Wait for the pending reflow, if any, to finish."""
        while self._pending is not None and not self._pending.done():
            task = self._pending
            try:
                await task
            except asyncio.CancelledError:
                # Superseded by a newer edit; wait for that one instead
                if task is self._pending:
                    raise
