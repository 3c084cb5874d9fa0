"""Per-document debouncing of diagnostics runs.

Each keystroke reschedules validation for its document; only the last
request within the delay window actually runs.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from picolsp.logging import get_logger


class DebounceManager:
    """Holds at most one pending validation task per document URI."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._lock = asyncio.Lock()
        self._logger = logger if logger is not None else get_logger("diagnostics")

    @property
    def pending_uris(self) -> list[str]:
        return [uri for uri, task in self._tasks.items() if not task.done()]

    async def schedule(
        self,
        uri: str,
        func: Callable[[], Awaitable[None]],
        delay_ms: int = 400,
    ) -> None:
        """
        Run ``func`` after ``delay_ms`` unless rescheduled or cancelled first.

        Any task already pending for ``uri`` is cancelled.
        """
        async with self._lock:
            await self._cancel_task(self._tasks.pop(uri, None))
            self._tasks[uri] = asyncio.create_task(
                self._debounced_call(uri, func, delay_ms)
            )

    async def cancel(self, uri: str) -> None:
        """Cancel the pending task for ``uri``, if any."""
        async with self._lock:
            await self._cancel_task(self._tasks.pop(uri, None))

    @staticmethod
    async def _cancel_task(task: asyncio.Task[None] | None) -> None:
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _debounced_call(
        self, uri: str, func: Callable[[], Awaitable[None]], delay_ms: int
    ) -> None:
        await asyncio.sleep(delay_ms / 1000)
        try:
            await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            self._logger.exception("Debounced diagnostics failed for %s", uri)
