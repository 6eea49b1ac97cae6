"""Cancellable periodic tasks for the refresh lifecycle.

Each timer is an asyncio task that sleeps for its interval and then awaits
its callback, forever, until cancelled. Callback failures are logged and
never stop the timer.
"""

import asyncio
from collections.abc import Awaitable, Callable

from src.shared.config.logging import get_logger

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class PeriodicTask:
    """Run an async callback on a fixed interval.

    Example:
        task = PeriodicTask("refresh", 1800, scheduler.refresh)
        task.start()
        ...
        task.cancel()
    """

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        callback: Callable[[], Awaitable[None]],
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize periodic task.

        Args:
            name: Timer name used in logs
            interval_seconds: Delay between runs
            callback: Coroutine function to run on each tick
            sleep: Sleep implementation (replaceable for virtual clocks)
        """
        self.name = name
        self.interval_seconds = interval_seconds
        self._callback = callback
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self.runs = 0

    @property
    def is_running(self) -> bool:
        """Whether the timer is armed."""
        return self._task is not None and not self._task.done()

    def start(self, run_immediately: bool = False) -> None:
        """Arm the timer, restarting it if already armed.

        Args:
            run_immediately: Run the callback once before the first interval

        Raises:
            RuntimeError: If called outside a running event loop
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(
            self._run(run_immediately), name=f"periodic-{self.name}"
        )
        logger.debug(
            "timer_armed",
            timer=self.name,
            interval_seconds=self.interval_seconds,
            run_immediately=run_immediately,
        )

    def cancel(self) -> None:
        """Disarm the timer. Safe to call when not armed."""
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.debug("timer_cancelled", timer=self.name)
        self._task = None

    async def _run(self, run_immediately: bool) -> None:
        if run_immediately:
            await self._tick()
        while True:
            await self._sleep(self.interval_seconds)
            await self._tick()

    async def _tick(self) -> None:
        self.runs += 1
        try:
            await self._callback()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("timer_callback_failed", timer=self.name, error=str(e), exc_info=True)
