"""Periodic refresh on the running asyncio loop"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from lifedash.config import Settings, settings

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], Union[Any, Awaitable[Any]]]


class ScheduleHandle:
    """Opaque handle returned by RefreshScheduler.start"""

    def __init__(self, task: "asyncio.Task[None]"):
        self._task = task

    def cancel(self) -> None:
        """Stop further runs; a run in progress is interrupted at its next await"""
        self._task.cancel()

    @property
    def active(self) -> bool:
        return not self._task.done()

    async def wait_closed(self) -> None:
        try:
            await self._task
        except asyncio.CancelledError:
            pass


class RefreshScheduler:
    """
    Re-invokes a callback every N seconds.

    The callback runs immediately on start and then after each interval. An
    exception from one run is logged and the schedule continues.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings

    def start(self, callback: RefreshCallback, interval_seconds: Optional[float] = None) -> ScheduleHandle:
        interval = interval_seconds if interval_seconds is not None else self.config.refresh_interval_seconds
        if interval <= 0:
            raise ValueError("interval_seconds must be positive")
        task = asyncio.get_running_loop().create_task(self._run(callback, interval))
        return ScheduleHandle(task)

    async def _run(self, callback: RefreshCallback, interval: float) -> None:
        runs = 0
        while True:
            runs += 1
            try:
                result = callback()
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(f"Scheduled refresh failed: {e}", extra={"step": "refresh", "run": runs})
            else:
                logger.debug("Scheduled refresh completed", extra={"step": "refresh", "run": runs})
            await asyncio.sleep(interval)
