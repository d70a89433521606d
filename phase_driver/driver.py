"""Phase driver cycling registered tests through a task scheduler."""

import asyncio
import logging
from dataclasses import dataclass, field

from phase_driver.models.descriptor import TestDescriptor
from phase_driver.models.result import RunOutcome, SuiteResult
from phase_driver.models.task import Err, Ok
from phase_driver.registry.base import TestRegistry
from phase_driver.registry.suite import DEFAULT_SUITE_NAME
from phase_driver.runner import ErrorCollector, PhaseRunner
from phase_driver.scheduler.base import TaskScheduler

log = logging.getLogger(__name__)

INTER_TEST_DELAY_MS = 100


@dataclass(frozen=True, kw_only=True)
class TestPhaseScheduler:
    """Runs each test's phases in order, one test at a time.

    Every phase is submitted to ``scheduler`` and the next phase only starts
    once the scheduler is idle again. Tear down always runs; the body only
    runs when set up succeeded. After a test is reported the next cycle
    starts through the registry's timer, ``inter_test_delay_ms`` later.
    """

    __test__ = False

    registry: TestRegistry
    scheduler: TaskScheduler
    name: str = DEFAULT_SUITE_NAME
    inter_test_delay_ms: float = INTER_TEST_DELAY_MS
    _cycles: set[asyncio.Task[RunOutcome | None]] = field(
        default_factory=set, init=False, repr=False, compare=False
    )
    _crashes: list[Exception] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    async def run(self) -> SuiteResult:
        """Cycle through every registered test and return the suite result.

        Raises:
            Exception: The first error raised by a cycle outside of its
                phases, once the registry has been finalized

        """
        log.info("Running suite: %s", self.name)
        try:
            await self.run_test_cycle()
        except Exception as exc:
            self._abort(exc)

        result = await self.registry.wait_until_finalized()
        if self._crashes:
            raise self._crashes[0]
        return result

    async def run_test_cycle(self) -> RunOutcome | None:
        """Run the next test, report it and schedule the following cycle.

        Returns:
            Outcome of the test that ran, or None once no tests remain and
            the registry has been finalized

        """
        test = self.registry.next()
        if test is None:
            self.registry.finalize()
            return None

        self.registry.current_test_name = test.name
        self.registry.result.run_count += 1
        self.registry.log(f"Running test: {test.name}")

        outcome = await self.run_single_test(test)
        self._report(test, outcome)

        self.registry.timeout(self._start_next_cycle, self.inter_test_delay_ms)
        return outcome

    async def run_single_test(self, test: TestDescriptor) -> RunOutcome:
        """Run set up, body and tear down, collecting every phase error."""
        runner = PhaseRunner(scheduler=self.scheduler)
        errors = ErrorCollector(test_name=test.name)

        settlement = await runner.run("set_up()", test.set_up, test.scope)
        if isinstance(settlement, Ok):
            settlement = await runner.run(f"{test.name}()", test.body, test.scope)
        if isinstance(settlement, Err):
            errors.record(settlement.error)

        settlement = await runner.run("tear_down()", test.tear_down, test.scope)
        if isinstance(settlement, Err):
            errors.record(settlement.error)

        return RunOutcome(test_name=test.name, errors=errors.drain())

    def _report(self, test: TestDescriptor, outcome: RunOutcome) -> None:
        if outcome.passed:
            self.registry.do_success(test)
            return

        for error in outcome.errors:
            self.registry.do_error(test, error)

    def _start_next_cycle(self) -> None:
        task = asyncio.create_task(self.run_test_cycle())
        self._cycles.add(task)
        task.add_done_callback(self._on_cycle_done)

    def _on_cycle_done(self, task: asyncio.Task[RunOutcome | None]) -> None:
        self._cycles.discard(task)
        if task.cancelled():
            return
        if isinstance(exc := task.exception(), Exception):
            self._abort(exc)

    def _abort(self, exc: Exception) -> None:
        log.error("Test cycle failed: %s", exc, exc_info=exc)
        self._crashes.append(exc)
        self.registry.finalize()
