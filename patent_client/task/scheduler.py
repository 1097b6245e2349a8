import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from patent_client.logging.logger import Log

Callback = Callable[[], Awaitable[object]]


class ScheduledCall(ABC):
    """Handle for a callback waiting to run."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running if it has not started yet."""


class BaseScheduler(ABC):
    """Contract for running a coroutine callback after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        """Run ``callback`` once, ``delay`` seconds from now."""


class _AsyncioCall(ScheduledCall):
    def __init__(self, task: "asyncio.Task[None]") -> None:
        self._task = task

    def cancel(self) -> None:
        self._task.cancel()


class AsyncioScheduler(BaseScheduler):
    """Runs callbacks as tasks on the running event loop."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        task = asyncio.get_running_loop().create_task(self._run_later(delay, callback))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return _AsyncioCall(task)

    async def aclose(self) -> None:
        """Cancel every callback still waiting or running."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    @staticmethod
    async def _run_later(delay: float, callback: Callback) -> None:
        await asyncio.sleep(delay)
        await callback()

    def _on_done(self, task: "asyncio.Task[None]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            Log.error(f"Scheduled callback failed: {exc!r}")


@dataclass
class _ManualCall(ScheduledCall):
    delay: float
    callback: Callback
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(BaseScheduler):
    """Scheduler that only runs callbacks when told to.

    Delays are recorded but never waited for, which makes polling
    deterministic in tests.
    """

    def __init__(self) -> None:
        self._queue: list[_ManualCall] = []
        self.delays: list[float] = []

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        call = _ManualCall(delay=delay, callback=callback)
        self._queue.append(call)
        self.delays.append(delay)
        return call

    @property
    def pending(self) -> int:
        return sum(1 for call in self._queue if not call.cancelled)

    async def run_next(self) -> bool:
        """Run the oldest pending callback. Returns False if none is left."""
        while self._queue:
            call = self._queue.pop(0)
            if not call.cancelled:
                await call.callback()
                return True
        return False

    async def run_all(self, limit: int = 1000) -> int:
        """Run callbacks, including newly scheduled ones, until none is left."""
        runs = 0
        while runs < limit and await self.run_next():
            runs += 1
        return runs
