"""Submission of single test phases and collection of their errors."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from phase_driver.models.task import Settlement
from phase_driver.scheduler.base import TaskScheduler

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class PhaseRunner:
    """Submits phases to a scheduler and waits for it to go idle."""

    scheduler: TaskScheduler

    async def run(
        self,
        description: str,
        fn: Callable[..., Any],
        scope: Any = None,
    ) -> Settlement:
        """Run one phase to completion.

        Args:
            description: Label for the phase, e.g. ``"set_up()"``
            fn: Phase function, bound to ``scope`` when it runs
            scope: Receiver shared by all phases of a test

        Returns:
            ``Ok`` or ``Err`` once the scheduler has drained every task the
            phase triggered

        """
        log.info("Scheduling %s", description)
        return await self.scheduler.schedule_and_wait_for_idle(description, fn, scope)


@dataclass(kw_only=True)
class ErrorCollector:
    """Errors raised by the phases of one test, in arrival order."""

    test_name: str
    _errors: list[Exception] = field(default_factory=list)

    def record(self, error: Exception) -> None:
        log.debug("Recording error for %s: %r", self.test_name, error)
        self._errors.append(error)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def drain(self) -> Sequence[Exception]:
        """Return the recorded errors and start over empty."""
        errors = tuple(self._errors)
        self._errors.clear()
        return errors
