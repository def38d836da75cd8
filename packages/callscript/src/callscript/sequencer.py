"""Ordered call-outcome sequencer."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from callscript.config import ExhaustionMode, parse_mode
from callscript.errors import ConfigurationError, ExhaustedError
from callscript.outcome import Fail, Outcome, Value

logger = logging.getLogger(__name__)


class OutcomeSequencer:
    """Dispenses a fixed list of outcomes, one per call, in order.

    Once the list is spent the exhaustion mode decides what happens:
    ``REPEAT_LAST`` keeps handing out the final outcome, ``FAIL_CLOSED``
    raises :class:`ExhaustedError` on every further call.

    Not thread-safe. Wrap an instance in your own lock to share it.
    """

    def __init__(
        self,
        outcomes: Iterable[Outcome] = (),
        *,
        mode: str | ExhaustionMode = ExhaustionMode.FAIL_CLOSED,
        name: str | None = None,
    ):
        self._outcomes: tuple[Outcome, ...] = tuple(outcomes)
        self._mode = parse_mode(mode)
        self._name = name
        self._cursor = 0
        self._calls = 0

        for outcome in self._outcomes:
            if not isinstance(outcome, (Value, Fail)):
                raise ConfigurationError(
                    f"Expected Value or Fail outcomes, got {type(outcome).__name__}"
                )

        if self._mode is ExhaustionMode.REPEAT_LAST and not self._outcomes:
            raise ConfigurationError(
                f"{self._label()}: repeat_last requires at least one outcome"
            )

    @property
    def outcomes(self) -> tuple[Outcome, ...]:
        return self._outcomes

    @property
    def mode(self) -> ExhaustionMode:
        return self._mode

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def calls(self) -> int:
        """Total dispense attempts, including those past exhaustion."""
        return self._calls

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def remaining(self) -> int:
        return max(len(self._outcomes) - self._cursor, 0)

    def reset(self) -> None:
        self._cursor = 0
        self._calls = 0

    def next_outcome(self) -> Outcome:
        """Advance and return the tagged outcome without raising for failures."""
        self._calls += 1

        if self._cursor < len(self._outcomes):
            index = self._cursor
            self._cursor += 1
            outcome = self._outcomes[index]
            logger.debug("%s: dispensing %s #%d", self._label(), outcome.kind.value, index)
            return outcome

        if self._mode is ExhaustionMode.REPEAT_LAST:
            logger.debug("%s: exhausted, repeating last outcome", self._label())
            return self._outcomes[-1]

        logger.debug("%s: exhausted after %d outcomes", self._label(), len(self._outcomes))
        raise ExhaustedError(
            f"{self._label()}: all {len(self._outcomes)} outcomes already dispensed",
            dispensed=len(self._outcomes),
            name=self._name,
        )

    def next(self) -> Any:
        """Advance and return the value, or raise the configured failure."""
        outcome = self.next_outcome()
        if isinstance(outcome, Fail):
            raise outcome.to_exception(index=self._cursor - 1)
        return outcome.value

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.next()

    def assert_consumed(self) -> None:
        left = self.remaining()
        if left:
            raise AssertionError(
                f"{self._label()}: {left} of {len(self._outcomes)} outcomes never dispensed"
            )

    def _label(self) -> str:
        return self._name or "sequencer"

    def __repr__(self) -> str:
        return (
            f"OutcomeSequencer(name={self._name!r}, mode={self._mode.value}, "
            f"cursor={self._cursor}/{len(self._outcomes)})"
        )
