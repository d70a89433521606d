"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Errors captured while running a single test cycle, in phase order."""

    test_name: str
    errors: Sequence[Exception] = ()

    @property
    def passed(self) -> bool:
        return not self.errors


@dataclass(frozen=True, kw_only=True)
class TestFailure:
    """A single error reported against a test."""

    __test__ = False

    test_name: str
    error: Exception


@dataclass(kw_only=True)
class TestReport:
    """What was reported for one run of a test: a pass, or its errors."""

    __test__ = False

    run: int
    test_name: str
    failures: list[TestFailure] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures


@dataclass(kw_only=True)
class SuiteResult:
    """Bookkeeping for a whole suite run.

    Counters are mutated by the phase driver and the registry while the
    suite runs; ``complete`` flips once the registry is finalized.
    """

    name: str
    total_count: int = 0
    run_count: int = 0
    passed: list[str] = field(default_factory=list)
    failures: list[TestFailure] = field(default_factory=list)
    reports: list[TestReport] = field(default_factory=list)
    complete: bool = False
    run_time: float = 0.0

    @property
    def success_count(self) -> int:
        return len(self.passed)

    @property
    def error_count(self) -> int:
        return len(self.failures)

    @property
    def is_success(self) -> bool:
        return self.complete and not self.failures
