"""Configuration for the phase driver."""

from pydantic import Field

from phase_driver.driver import INTER_TEST_DELAY_MS
from phase_driver.models.base import Model
from phase_driver.registry.suite import DEFAULT_SUITE_NAME


class DriverConfig(Model):
    """Configuration for a suite run."""

    name: str = DEFAULT_SUITE_NAME
    # Time left for reporting to settle between tests, in milliseconds
    inter_test_delay_ms: float = Field(default=INTER_TEST_DELAY_MS, ge=0)
