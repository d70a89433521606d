"""Tests for CLI module."""

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from phase_driver.cli import format_output, log_results_summary, main, run
from phase_driver.config import DriverConfig
from phase_driver.models.descriptor import TestDescriptor
from phase_driver.models.result import SuiteResult, TestFailure, TestReport

TEST_MODULE = """
calls = []

def set_up():
    calls.append("set_up")

def tear_down():
    calls.append("tear_down")

def test_passes():
    calls.append("passes")

def test_fails():
    raise AssertionError("expected failure")
"""


def _result() -> SuiteResult:
    body = TestFailure(test_name="t1", error=ValueError("body"))
    cleanup = TestFailure(test_name="t1", error=OSError("cleanup"))
    bad = TestFailure(test_name="t2", error=RuntimeError("bad"))
    return SuiteResult(
        name="suite",
        total_count=3,
        run_count=3,
        passed=["t0"],
        failures=[body, cleanup, bad],
        reports=[
            TestReport(run=1, test_name="t1", failures=[body, cleanup]),
            TestReport(run=2, test_name="t0"),
            TestReport(run=3, test_name="t2", failures=[bad]),
        ],
        complete=True,
        run_time=1.23456,
    )


def test_format_output_empty() -> None:
    """Returns empty totals when nothing ran."""
    output = format_output(SuiteResult(name="empty", complete=True))

    assert output == {
        "suite": "empty",
        "total": 0,
        "passed": 0,
        "failed": 0,
        "errors": 0,
        "run_time": 0.0,
        "results": [],
    }


def test_format_output_keeps_run_order() -> None:
    """Lists tests in run order with each of their errors."""
    output = format_output(_result())

    assert output["total"] == 3
    assert output["passed"] == 1
    assert output["failed"] == 2
    assert output["errors"] == 3
    assert output["run_time"] == 1.235
    assert output["results"] == [
        {
            "test": "t1",
            "status": "failure",
            "errors": ["ValueError: body", "OSError: cleanup"],
        },
        {"test": "t0", "status": "success", "errors": []},
        {"test": "t2", "status": "failure", "errors": ["RuntimeError: bad"]},
    ]


def test_log_results_summary(caplog: pytest.LogCaptureFixture) -> None:
    """Logs one line per test and one line per error."""
    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), _result())

    assert "Test Results Summary: suite" in caplog.text
    assert "✅ t0: success" in caplog.text
    assert "❌ t1: failure" in caplog.text
    assert "  Error: ValueError: body" in caplog.text
    assert "  Error: OSError: cleanup" in caplog.text


async def test_format_output_keeps_same_named_tests_apart() -> None:
    """Reports two failing tests that share a name separately."""
    tests = [
        TestDescriptor(name="dup", body=_fail("first")),
        TestDescriptor(name="dup", body=_fail("second")),
    ]

    result = await run(tests, DriverConfig(inter_test_delay_ms=0))
    output = format_output(result)

    assert output["failed"] == 2
    assert [r["errors"] for r in output["results"]] == [
        ["RuntimeError: first"],
        ["RuntimeError: second"],
    ]


def _fail(message: str) -> Callable[[], None]:
    def body() -> None:
        raise RuntimeError(message)

    return body


async def test_run_uses_config() -> None:
    """Runs the tests under the configured suite name."""
    tests = [TestDescriptor(name="t", body=lambda: None)]

    result = await run(tests, DriverConfig(name="configured", inter_test_delay_ms=0))

    assert result.name == "configured"
    assert result.passed == ["t"]
    assert result.complete


class TestMain:
    """Tests for the console entry point."""

    def test_exits_non_zero_on_failures(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Prints a JSON report and exits 1 when a test fails."""
        (tmp_path / "cli_sample_tests.py").write_text(TEST_MODULE)
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "phase-driver",
                "cli_sample_tests",
                "--config",
                '{"name": "sample", "inter_test_delay_ms": 0}',
            ],
        )

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["suite"] == "sample"
        assert output["total"] == 2
        assert output["passed"] == 1
        assert output["results"][0] == {
            "test": "test_fails",
            "status": "failure",
            "errors": ["AssertionError: expected failure"],
        }

        module = sys.modules["cli_sample_tests"]
        assert module.calls == ["set_up", "tear_down", "set_up", "passes", "tear_down"]

    def test_exits_zero_without_tests(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Exits 0 with an empty report when the module has no tests."""
        (tmp_path / "cli_empty_tests.py").write_text("VALUE = 1\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.setattr(sys, "argv", ["phase-driver", "cli_empty_tests"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 0
        assert json.loads(capsys.readouterr().out)["total"] == 0
