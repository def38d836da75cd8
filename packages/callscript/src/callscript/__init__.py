"""Scripted call outcomes for test doubles."""

import logging

from callscript.builder import SequenceBuilder, sequence
from callscript.config import ExhaustionMode
from callscript.doubles import (
    AsyncScriptedMethod,
    Call,
    RecordingCallable,
    ScriptedMethod,
    Stub,
)
from callscript.errors import (
    CallscriptError,
    ConfigurationError,
    ConfiguredFailure,
    ExhaustedError,
)
from callscript.outcome import Fail, Outcome, OutcomeKind, Value, acapture, capture
from callscript.sequencer import OutcomeSequencer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncScriptedMethod",
    "Call",
    "CallscriptError",
    "ConfigurationError",
    "ConfiguredFailure",
    "ExhaustedError",
    "ExhaustionMode",
    "Fail",
    "Outcome",
    "OutcomeKind",
    "OutcomeSequencer",
    "RecordingCallable",
    "ScriptedMethod",
    "SequenceBuilder",
    "Stub",
    "Value",
    "acapture",
    "capture",
    "sequence",
]
