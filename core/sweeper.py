"""
Cancellable repeating task on the asyncio event loop.
"""

import asyncio
from typing import Callable, Optional

from utils.logging_config import get_logger

logger = get_logger('Sweeper')


class PeriodicTask:
    """Runs a synchronous callable every ``interval`` seconds until stopped."""

    def __init__(self, func: Callable[[], object], interval: float, name: str = "periodic"):
        self._func = func
        self._interval = float(interval)
        self._name = name
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """Start the loop. Returns False if it was already running."""
        if self.running:
            return False
        self._task = asyncio.create_task(self._run(), name=self._name)
        logger.debug(f"Started {self._name} (every {self._interval:g}s)")
        return True

    async def stop(self) -> bool:
        """Cancel the loop and wait for it to finish. Returns False if it was not running."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return False
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Stopped {self._name}")
        return True

    async def _run(self):
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._func()
            except Exception:
                # One bad run must not kill the loop
                logger.exception(f"{self._name} run failed")
