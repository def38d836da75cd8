"""Exhaustion modes for outcome sequencers."""

from __future__ import annotations

from enum import Enum

from callscript.errors import ConfigurationError


class ExhaustionMode(str, Enum):
    """What a sequencer does once every configured outcome has been dispensed."""

    REPEAT_LAST = "repeat_last"
    FAIL_CLOSED = "fail_closed"


def parse_mode(value: str | ExhaustionMode) -> ExhaustionMode:
    """Accept an enum member or its value, case-insensitively."""
    if isinstance(value, ExhaustionMode):
        return value
    normalized = str(value).strip().lower().replace("-", "_")
    try:
        return ExhaustionMode(normalized)
    except ValueError as e:
        valid = ", ".join(m.value for m in ExhaustionMode)
        raise ConfigurationError(
            f"Unknown exhaustion mode: {value!r}. Expected one of: {valid}",
            cause=e,
        ) from e
