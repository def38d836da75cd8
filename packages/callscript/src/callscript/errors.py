"""Error hierarchy for scripted call outcomes."""

from __future__ import annotations

from typing import Any


class CallscriptError(Exception):
    """Base error for everything raised by callscript itself."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(CallscriptError):
    """Invalid sequencer or stub configuration."""


class ExhaustedError(CallscriptError):
    """A fail-closed sequencer was called after its last outcome."""

    def __init__(self, message: str, *, dispensed: int, name: str | None = None):
        super().__init__(message)
        self.dispensed = dispensed
        self.name = name


class ConfiguredFailure(CallscriptError):
    """A failure outcome whose error was a description rather than an exception."""

    def __init__(self, error: Any, *, index: int | None = None):
        super().__init__(str(error))
        self.error = error
        self.index = index
