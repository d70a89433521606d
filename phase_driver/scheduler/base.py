"""Abstract base class for single-threaded task schedulers."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from phase_driver.models.task import Settlement


class TaskScheduler(ABC):
    """Abstract base for schedulers that phases are submitted to.

    A scheduler runs one task at a time. It is *idle* once no task remains
    queued, including tasks spawned transitively by other tasks and tasks
    submitted by unrelated callers.
    """

    @property
    @abstractmethod
    def is_idle(self) -> bool:
        """Whether no task is queued or running."""

    @abstractmethod
    def schedule(
        self,
        description: str,
        fn: Callable[..., Any],
        scope: Any = None,
    ) -> None:
        """Queue ``fn`` bound to ``scope`` without waiting for it to run.

        Args:
            description: Human-readable label used in logs
            fn: Function to run; may return an awaitable
            scope: Receiver the function is bound to

        """

    @abstractmethod
    async def schedule_and_wait_for_idle(
        self,
        description: str,
        fn: Callable[..., Any],
        scope: Any = None,
    ) -> Settlement:
        """Queue ``fn`` and wait until the scheduler is idle.

        Args:
            description: Human-readable label used in logs
            fn: Function to run; may return an awaitable
            scope: Receiver the function is bound to

        Returns:
            ``Ok`` if the task and everything it scheduled succeeded,
            otherwise ``Err`` carrying the first error raised

        """
