"""Tests for DriverConfig."""

import pytest
from pydantic import ValidationError

from phase_driver.config import DriverConfig
from phase_driver.driver import INTER_TEST_DELAY_MS
from phase_driver.registry.suite import DEFAULT_SUITE_NAME


def test_defaults() -> None:
    """Uses the untitled name and the standard inter-test delay."""
    config = DriverConfig()

    assert config.name == DEFAULT_SUITE_NAME
    assert config.inter_test_delay_ms == INTER_TEST_DELAY_MS


def test_rejects_negative_delay() -> None:
    """Rejects a negative inter-test delay."""
    with pytest.raises(ValidationError):
        DriverConfig(inter_test_delay_ms=-1)


def test_rejects_unknown_fields() -> None:
    """Rejects misspelled configuration keys."""
    with pytest.raises(ValidationError):
        DriverConfig(inter_test_delay=5)  # type: ignore[call-arg]
