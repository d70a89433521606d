"""Loading of test modules by dotted name."""

import importlib
from collections.abc import Sequence

from phase_driver.models.descriptor import TestDescriptor
from phase_driver.registry.discovery import discover_module_tests


class TestModuleNotFoundError(Exception):
    """Raised when a test module cannot be imported."""

    __test__ = False


def load_test_module(name: str) -> Sequence[TestDescriptor]:
    """Import a module and discover the tests it defines.

    Args:
        name: Dotted module name (e.g., "tests.smoke")

    Returns:
        Descriptors for the module's tests, in run order

    Raises:
        TestModuleNotFoundError: If the module or one of its parents does
            not exist

    """
    try:
        module = importlib.import_module(name)
    except ModuleNotFoundError as exc:
        missing = exc.name
        if missing is None or not (name == missing or name.startswith(f"{missing}.")):
            raise
        raise TestModuleNotFoundError(
            f"Test module '{name}' not found (missing '{missing}')"
        ) from exc

    return discover_module_tests(module)
