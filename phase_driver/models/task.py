"""Models for units of work submitted to a task scheduler."""

from collections.abc import Callable
from dataclasses import dataclass
from types import FunctionType, MethodType
from typing import Any, TypeAlias


@dataclass(frozen=True, kw_only=True)
class PhaseTask:
    """A named unit of work bound to a receiver.

    Plain functions are bound to ``scope`` the way a method is bound to its
    instance, so ``function`` receives ``scope`` as its first argument.
    Bound methods and other callables are invoked without arguments.
    """

    description: str
    function: Callable[..., Any]
    scope: Any = None

    def bound(self) -> Callable[[], Any]:
        """Return the function bound to the task's scope."""
        if self.scope is not None and isinstance(self.function, FunctionType):
            return MethodType(self.function, self.scope)
        return self.function

    def __call__(self) -> Any:
        return self.bound()()


@dataclass(frozen=True, kw_only=True)
class Ok:
    """Successful settlement of a scheduled task."""

    description: str


@dataclass(frozen=True, kw_only=True)
class Err:
    """Failed settlement carrying the error raised by the task."""

    description: str
    error: Exception


Settlement: TypeAlias = Ok | Err
