"""
Scheduling Primitives
Cancelable timers and trailing-edge debounced async jobs.

The editor services never touch event-loop timers directly; they receive an
IScheduler so the same debounce logic runs on the asyncio loop in production
and on a manually advanced clock in tests.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, Protocol, Set

from loguru import logger


class TimerHandle(Protocol):
    """Handle returned by IScheduler.call_later"""

    def cancel(self) -> None:
        ...


class IScheduler(ABC):
    """Timer source interface"""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds unless the handle is cancelled"""
        pass


class AsyncioScheduler(IScheduler):
    """Scheduler backed by the running asyncio event loop"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class DebouncedTask:
    """
    Runs an async job once triggers have been quiet for ``delay`` seconds.

    Every ``trigger()`` cancels the pending timer and starts a new one, so only
    the trailing edge fires. The job itself runs as an asyncio task; errors it
    raises are logged here because nobody awaits a timer-started run.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[None]],
        delay: float,
        scheduler: IScheduler,
        name: str = "debounced-task",
    ):
        self._job = job
        self.delay = delay
        self._scheduler = scheduler
        self.name = name
        self._handle: Optional[TimerHandle] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet"""
        return self._handle is not None

    @property
    def running(self) -> bool:
        return bool(self._running)

    def trigger(self) -> None:
        self.cancel()
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def flush(self) -> None:
        """Run a pending job immediately instead of waiting for the timer"""
        if not self.pending:
            return
        self.cancel()
        await self._run()

    async def wait_idle(self) -> None:
        """Wait until every timer-started run has finished"""
        while self._running:
            await asyncio.wait(list(self._running))

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self._run())
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _run(self) -> None:
        try:
            await self._job()
        except Exception as e:
            logger.exception(f"{self.name} failed: {e}")
