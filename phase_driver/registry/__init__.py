"""Test registries consumed by the phase driver."""

from phase_driver.registry.base import TestRegistry
from phase_driver.registry.discovery import discover_module_tests, discover_tests
from phase_driver.registry.suite import DEFAULT_SUITE_NAME, TestSuite

__all__ = [
    "DEFAULT_SUITE_NAME",
    "TestRegistry",
    "TestSuite",
    "discover_module_tests",
    "discover_tests",
]
