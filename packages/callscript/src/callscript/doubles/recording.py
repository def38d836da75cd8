from collections.abc import Callable
from typing import Any

from callscript.doubles.method import Call
from callscript.outcome import capture


class RecordingCallable:
    def __init__(self, wrapped: Callable[..., Any]):
        self._wrapped = wrapped
        self.history: list[Call] = []

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        outcome = capture(self._wrapped, *args, **kwargs)
        self.history.append(Call(args, kwargs, outcome))
        return outcome.unwrap()
