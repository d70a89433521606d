"""Test factories for generating test data."""

from polyfactory import Use
from polyfactory.factories import DataclassFactory

from phase_driver.models.descriptor import TestDescriptor, noop


class TestDescriptorFactory(DataclassFactory[TestDescriptor]):
    """Factory for TestDescriptor with no-op phases."""

    __model__ = TestDescriptor

    scope = None
    set_up = Use(lambda: noop)
    body = Use(lambda: noop)
    tear_down = Use(lambda: noop)

