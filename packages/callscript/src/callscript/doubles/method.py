from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from callscript.errors import ExhaustedError
from callscript.outcome import Fail, Outcome
from callscript.sequencer import OutcomeSequencer


@dataclass(slots=True)
class Call:
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    outcome: Outcome | None = None


class ScriptedMethod:
    """A callable that records its arguments and answers from a sequencer."""

    def __init__(
        self,
        sequencer: OutcomeSequencer,
        name: str | None = None,
        on_call: Callable[[str, Call], None] | None = None,
    ):
        self.sequencer = sequencer
        self.name = name or sequencer.name or "method"
        self.calls: list[Call] = []
        self._on_call = on_call

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def reset(self) -> None:
        self.sequencer.reset()
        self.calls.clear()

    def _record(self, call: Call) -> None:
        self.calls.append(call)
        if self._on_call is not None:
            self._on_call(self.name, call)

    def _dispense(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        try:
            outcome = self.sequencer.next_outcome()
        except ExhaustedError as e:
            self._record(Call(args, kwargs, Fail(e)))
            raise

        self._record(Call(args, kwargs, outcome))
        if isinstance(outcome, Fail):
            raise outcome.to_exception(index=self.sequencer.cursor - 1)
        return outcome.value

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._dispense(args, kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, calls={self.call_count})"


class AsyncScriptedMethod(ScriptedMethod):
    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._dispense(args, kwargs)
