"""Cooperative task scheduler running on the asyncio event loop."""

import asyncio
import inspect
import logging
from collections import deque
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from phase_driver.models.task import Err, Ok, PhaseTask, Settlement
from phase_driver.scheduler.base import TaskScheduler

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class Frame:
    """Group of tasks settled together: a root task and all it spawns."""

    description: str
    detached: bool = False
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class Application(TaskScheduler):
    """Runs queued tasks one at a time, in submission order.

    Tasks scheduled while another task runs join the running task's frame,
    so the frame settles with the first error raised anywhere inside it.
    Once a frame has failed its remaining queued tasks are dropped.
    """

    def __init__(self) -> None:
        self._queue: deque[tuple[Frame, PhaseTask]] = deque()
        self._running: PhaseTask | None = None
        self._lock = asyncio.Lock()
        self._frame: ContextVar[Frame | None] = ContextVar("frame", default=None)

    @property
    def is_idle(self) -> bool:
        return not self._queue and self._running is None

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    def schedule(
        self,
        description: str,
        fn: Callable[..., Any],
        scope: Any = None,
    ) -> None:
        """Queue a task in the current frame, or in a detached one."""
        frame = self._frame.get()
        if frame is None:
            frame = Frame(description=description, detached=True)
        self._queue.append(
            (frame, PhaseTask(description=description, function=fn, scope=scope))
        )

    async def schedule_and_wait_for_idle(
        self,
        description: str,
        fn: Callable[..., Any],
        scope: Any = None,
    ) -> Settlement:
        """Queue a task in a new frame and drain the queue."""
        frame = Frame(description=description)
        self._queue.append(
            (frame, PhaseTask(description=description, function=fn, scope=scope))
        )
        await self._drain()

        if frame.error is not None:
            return Err(description=description, error=frame.error)
        return Ok(description=description)

    async def _drain(self) -> None:
        async with self._lock:
            while self._queue:
                frame, task = self._queue.popleft()
                if frame.failed:
                    log.debug(
                        "Discarding task %r, frame %r already failed",
                        task.description,
                        frame.description,
                    )
                    continue
                await self._execute(frame, task)

    async def _execute(self, frame: Frame, task: PhaseTask) -> None:
        token = self._frame.set(frame)
        self._running = task
        try:
            result = task()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            if frame.detached:
                log.error(
                    "Unhandled error in task %r: %s", task.description, exc, exc_info=exc
                )
            else:
                log.debug("Task %r failed: %s", task.description, exc)
            frame.error = exc
        finally:
            self._running = None
            self._frame.reset(token)
