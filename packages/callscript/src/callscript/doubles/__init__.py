from callscript.doubles.method import AsyncScriptedMethod, Call, ScriptedMethod
from callscript.doubles.recording import RecordingCallable
from callscript.doubles.stub import Stub

__all__ = [
    "AsyncScriptedMethod",
    "Call",
    "RecordingCallable",
    "ScriptedMethod",
    "Stub",
]
