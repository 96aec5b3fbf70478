"""
Debounced execution for search-as-you-type.

Each submitted value cancels the pending one; the action only runs once input
has been quiet for ``delay`` seconds.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger("countme.debounce")


class Debouncer:
    """
    Args:
        delay: quiet period in seconds before the action runs
        action: coroutine function called with the last submitted value
    """

    def __init__(self, delay: float, action: Callable[[Any], Awaitable[Any]]):
        self.delay = delay
        self.action = action
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, value: Any) -> asyncio.Task:
        """Cancel any pending run and schedule a new one for ``value``."""
        self.cancel()
        self._task = asyncio.create_task(self._run(value))
        return self._task

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the scheduled run, if any, to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        await asyncio.wait([task])

    async def _run(self, value: Any) -> None:
        await asyncio.sleep(self.delay)
        logger.debug("Debounce elapsed, running action for %r", value)
        await self.action(value)
