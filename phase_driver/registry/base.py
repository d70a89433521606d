"""Abstract base class for test registries driven by the phase driver."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from phase_driver.models.descriptor import TestDescriptor
from phase_driver.models.result import SuiteResult


class TestRegistry(ABC):
    """Capabilities the phase driver needs from a test registry.

    The registry owns test enumeration, result bookkeeping, logging and
    timers. The driver only reads descriptors and reports back through the
    sinks below; it also bumps the counters on ``result`` before each test.
    """

    __test__ = False

    result: SuiteResult
    current_test_name: str | None = None

    @abstractmethod
    def register_tests(self, tests: Iterable[TestDescriptor]) -> None:
        """Append tests to the run, in order."""

    @abstractmethod
    def next(self) -> TestDescriptor | None:
        """Advance to the next test, or return None once exhausted."""

    @abstractmethod
    def log(self, message: str) -> None:
        """Record a progress message."""

    @abstractmethod
    def do_success(self, test: TestDescriptor) -> None:
        """Record that a test passed."""

    @abstractmethod
    def do_error(self, test: TestDescriptor, error: Exception) -> None:
        """Record one error raised by a test."""

    @abstractmethod
    def finalize(self) -> None:
        """Close the run once every test has been cycled."""

    @abstractmethod
    def timeout(self, callback: Callable[[], Any], delay_ms: float) -> Any:
        """Run ``callback`` after ``delay_ms`` milliseconds."""

    @abstractmethod
    async def wait_until_finalized(self) -> SuiteResult:
        """Wait for ``finalize`` and return the final result."""
