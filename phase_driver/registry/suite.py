"""In-memory test registry backed by the asyncio event loop."""

import asyncio
import logging
import time
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from phase_driver.models.descriptor import TestDescriptor
from phase_driver.models.result import SuiteResult, TestFailure, TestReport
from phase_driver.registry.base import TestRegistry

log = logging.getLogger(__name__)

DEFAULT_SUITE_NAME = "Untitled Test Case"


class TestSuite(TestRegistry):
    """Ordered collection of tests plus the bookkeeping for one run."""

    def __init__(
        self,
        name: str = DEFAULT_SUITE_NAME,
        tests: Iterable[TestDescriptor] = (),
    ) -> None:
        self.name = name
        self.result = SuiteResult(name=name)
        self.current_test_name = None
        self._tests: list[TestDescriptor] = []
        self._iterator: Iterator[TestDescriptor] | None = None
        self._started_at: float | None = None
        self._finalized = asyncio.Event()
        self.register_tests(tests)

    def register_tests(self, tests: Iterable[TestDescriptor]) -> None:
        self._tests.extend(tests)
        self.result.total_count = len(self._tests)

    def reset(self) -> None:
        """Start enumeration over with a fresh iterator and empty result."""
        self._iterator = None
        self._started_at = None
        self._finalized.clear()
        self.current_test_name = None
        self.result = SuiteResult(name=self.name, total_count=len(self._tests))

    def next(self) -> TestDescriptor | None:
        if self._iterator is None:
            self._iterator = iter(list(self._tests))
            self._started_at = time.monotonic()
        return next(self._iterator, None)

    def log(self, message: str) -> None:
        log.info("%s", message)

    def do_success(self, test: TestDescriptor) -> None:
        self.result.passed.append(test.name)
        self.result.reports.append(
            TestReport(run=self.result.run_count, test_name=test.name)
        )
        log.info("%s : PASSED", test.name)

    def do_error(self, test: TestDescriptor, error: Exception) -> None:
        failure = TestFailure(test_name=test.name, error=error)
        self.result.failures.append(failure)
        self._report_for_error(test).failures.append(failure)
        log.error("%s : FAILED: %s", test.name, error, exc_info=error)

    def _report_for_error(self, test: TestDescriptor) -> TestReport:
        # Errors of the same run share one report
        reports = self.result.reports
        run = self.result.run_count
        if reports and reports[-1].run == run and not reports[-1].passed:
            return reports[-1]
        reports.append(TestReport(run=run, test_name=test.name))
        return reports[-1]

    def finalize(self) -> None:
        if self.result.complete:
            return

        if self._started_at is not None:
            self.result.run_time = time.monotonic() - self._started_at
        self.result.complete = True
        self.current_test_name = None
        log.info(
            "%s: %d of %d tests run in %.3fs, %d passed, %d error(s)",
            self.name,
            self.result.run_count,
            self.result.total_count,
            self.result.run_time,
            self.result.success_count,
            self.result.error_count,
        )
        self._finalized.set()

    def timeout(
        self, callback: Callable[[], Any], delay_ms: float
    ) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)

    async def wait_until_finalized(self) -> SuiteResult:
        await self._finalized.wait()
        return self.result
