"""Discovery of test phases on objects and modules."""

import inspect
import logging
from collections.abc import Callable, Sequence
from functools import partial
from types import ModuleType
from typing import Any

from phase_driver.models.descriptor import TestDescriptor, noop

log = logging.getLogger(__name__)

TEST_PREFIX = "test"
SET_UP_NAMES = ("set_up", "setUp")
TEAR_DOWN_NAMES = ("tear_down", "tearDown")


def _phase(namespace: Any, name: str) -> Callable[..., Any]:
    # Static methods must not be bound to the test's scope
    if inspect.isclass(namespace):
        attr = inspect.getattr_static(namespace, name)
        if isinstance(attr, staticmethod):
            return partial(attr.__func__)
    return getattr(namespace, name)


def _lookup(namespace: Any, names: Sequence[str]) -> Callable[..., Any]:
    for name in names:
        if callable(getattr(namespace, name, None)):
            return _phase(namespace, name)
    return noop


def _takes_no_arguments(cls: type) -> bool:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False

    return all(
        param.default is not param.empty
        or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
        for param in signature.parameters.values()
    )


def discover_tests(obj: Any, prefix: str = "") -> Sequence[TestDescriptor]:
    """Build descriptors for every ``test*`` method of an instance.

    Methods are looked up on the class and bound to ``obj`` when each phase
    runs, so ``obj`` is shared by the set up, body and tear down of a test.
    Static methods run unbound. Tests are returned sorted by name.
    """
    cls = type(obj)
    set_up = _lookup(cls, SET_UP_NAMES)
    tear_down = _lookup(cls, TEAR_DOWN_NAMES)

    return [
        TestDescriptor(
            name=f"{prefix}{name}",
            scope=obj,
            set_up=set_up,
            body=_phase(cls, name),
            tear_down=tear_down,
        )
        for name in sorted(dir(cls))
        if name.startswith(TEST_PREFIX) and callable(getattr(cls, name))
    ]


def discover_module_tests(module: ModuleType) -> Sequence[TestDescriptor]:
    """Build descriptors for the test functions and classes of a module.

    Module-level ``test*`` functions come first, sharing the module-level
    ``set_up``/``tear_down`` if any. Classes named ``Test*`` that are defined
    in the module and take no constructor arguments follow, one instance per
    class.
    """
    set_up = _lookup(module, SET_UP_NAMES)
    tear_down = _lookup(module, TEAR_DOWN_NAMES)
    tests: list[TestDescriptor] = []
    classes: list[type] = []

    for name, member in sorted(vars(module).items()):
        if inspect.isfunction(member) and name.startswith(TEST_PREFIX):
            if member.__module__ != module.__name__:
                continue
            tests.append(
                TestDescriptor(
                    name=name, set_up=set_up, body=member, tear_down=tear_down
                )
            )
        elif inspect.isclass(member) and name.startswith("Test"):
            if member.__module__ != module.__name__:
                continue
            if getattr(member, "__test__", True) is False:
                continue
            classes.append(member)

    for cls in classes:
        if not _takes_no_arguments(cls):
            log.warning(
                "Skipping %s.%s: constructor requires arguments",
                module.__name__,
                cls.__name__,
            )
            continue
        tests.extend(discover_tests(cls(), prefix=f"{cls.__name__}."))

    return tests
