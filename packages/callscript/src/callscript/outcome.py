"""Tagged outcomes: what a single scripted invocation produces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, NoReturn, TypeVar

from callscript.errors import ConfiguredFailure

T = TypeVar("T")


class OutcomeKind(str, Enum):
    VALUE = "value"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class Value(Generic[T]):
    """Return ``value`` from the invocation. ``Value(None)`` is a real outcome."""

    value: T

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.VALUE

    @property
    def is_value(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Fail:
    """Fail the invocation with ``error``.

    An exception instance is raised as-is. Anything else (usually a message
    string) is raised wrapped in :class:`ConfiguredFailure`.
    """

    error: Any

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.FAILURE

    @property
    def is_value(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def to_exception(self, index: int | None = None) -> BaseException:
        if isinstance(self.error, BaseException):
            # Same instance each time; drop frames left over from earlier raises
            return self.error.with_traceback(None)
        return ConfiguredFailure(self.error, index=index)

    def unwrap(self) -> NoReturn:
        raise self.to_exception()


Outcome = Value | Fail


def capture(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Value[T] | Fail:
    """Call ``fn`` and record what happened instead of letting it raise."""
    try:
        return Value(fn(*args, **kwargs))
    except Exception as e:
        return Fail(e)


async def acapture(
    fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
) -> Value[T] | Fail:
    """Await ``fn`` and record what happened instead of letting it raise."""
    try:
        return Value(await fn(*args, **kwargs))
    except Exception as e:
        return Fail(e)
