"""Models for registered tests."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


def noop(*_: Any) -> None:
    """Phase function that does nothing."""


@dataclass(frozen=True, kw_only=True)
class TestDescriptor:
    """A registered test and the three phase functions that make it up."""

    __test__ = False

    name: str
    body: Callable[..., Any]
    scope: Any = None
    set_up: Callable[..., Any] = noop
    tear_down: Callable[..., Any] = noop
