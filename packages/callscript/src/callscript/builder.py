from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from callscript.config import ExhaustionMode
from callscript.outcome import Fail, Outcome, Value
from callscript.sequencer import OutcomeSequencer


class SequenceBuilder:
    """Fluent, append-only setup for an :class:`OutcomeSequencer`.

    Each ``build()`` snapshots the outcomes appended so far.
    """

    def __init__(self, name: str | None = None):
        self._name = name
        self._outcomes: list[Outcome] = []

    def then(self, outcome: Outcome) -> SequenceBuilder:
        self._outcomes.append(outcome)
        return self

    def returns(self, value: Any) -> SequenceBuilder:
        return self.then(Value(value))

    def returns_many(self, values: Iterable[Any]) -> SequenceBuilder:
        for value in values:
            self.returns(value)
        return self

    def raises(self, error: Any) -> SequenceBuilder:
        return self.then(Fail(error))

    def build(
        self, *, mode: str | ExhaustionMode = ExhaustionMode.FAIL_CLOSED
    ) -> OutcomeSequencer:
        return OutcomeSequencer(self._outcomes, mode=mode, name=self._name)

    def __len__(self) -> int:
        return len(self._outcomes)


def sequence(
    *outcomes: Outcome,
    mode: str | ExhaustionMode = ExhaustionMode.FAIL_CLOSED,
    name: str | None = None,
) -> OutcomeSequencer:
    return OutcomeSequencer(outcomes, mode=mode, name=name)
