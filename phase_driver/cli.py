"""CLI entry point for running a test module through the phase driver."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from phase_driver.config import DriverConfig
from phase_driver.driver import TestPhaseScheduler
from phase_driver.loading import load_test_module
from phase_driver.models.descriptor import TestDescriptor
from phase_driver.models.result import SuiteResult
from phase_driver.registry.suite import TestSuite
from phase_driver.scheduler.application import Application

STATUS_SYMBOLS = {
    "success": "✅",
    "failure": "❌",
}


def log_results_summary(log: logging.Logger, result: SuiteResult) -> None:
    """Log a formatted summary of test results with their errors."""
    log.info("=" * 80)
    log.info("Test Results Summary: %s", result.name)
    log.info("=" * 80)

    for entry in format_output(result)["results"]:
        symbol = STATUS_SYMBOLS.get(entry["status"], "?")
        log.info("%s %s: %s", symbol, entry["test"], entry["status"])
        for error in entry["errors"]:
            log.info("  Error: %s", error)


async def run(
    tests: Sequence[TestDescriptor],
    config: DriverConfig,
) -> SuiteResult:
    """Run tests with a fresh scheduler and registry and return the result."""
    suite = TestSuite(name=config.name, tests=tests)
    driver = TestPhaseScheduler(
        registry=suite,
        scheduler=Application(),
        name=config.name,
        inter_test_delay_ms=config.inter_test_delay_ms,
    )
    return await driver.run()


def format_output(result: SuiteResult) -> dict[str, Any]:
    """Format a suite result for JSON output."""
    all_results: list[dict[str, Any]] = [
        {
            "test": report.test_name,
            "status": "success" if report.passed else "failure",
            "errors": [
                f"{type(failure.error).__name__}: {failure.error}"
                for failure in report.failures
            ],
        }
        for report in result.reports
    ]

    return {
        "suite": result.name,
        "total": result.run_count,
        "passed": result.success_count,
        "failed": sum(1 for r in all_results if r["status"] == "failure"),
        "errors": result.error_count,
        "run_time": round(result.run_time, 3),
        "results": all_results,
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run a test module phase by phase on a cooperative scheduler"
    )
    parser.add_argument(
        "module",
        help="Dotted name of the module holding the tests",
    )
    parser.add_argument(
        "--config",
        default="{}",
        help="JSON configuration for the driver (name, inter_test_delay_ms)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    log = logging.getLogger("phase_driver")

    config = DriverConfig(**json.loads(args.config))
    log.info("Loading tests from %s", args.module)
    tests = load_test_module(args.module)

    if not tests:
        log.info("No tests found in %s", args.module)

    result = asyncio.run(run(tests, config))

    log_results_summary(log, result)
    print(json.dumps(format_output(result), indent=2))

    sys.exit(0 if result.is_success else 1)


if __name__ == "__main__":  # pragma: no cover
    main()
