"""Duck-typed service stand-ins whose methods answer from sequencers."""

from __future__ import annotations

import inspect
from typing import Any

from callscript.builder import SequenceBuilder
from callscript.config import ExhaustionMode
from callscript.doubles.method import AsyncScriptedMethod, Call, ScriptedMethod
from callscript.errors import ConfigurationError
from callscript.outcome import Fail, Value
from callscript.sequencer import OutcomeSequencer


class Stub:
    """Stand-in for a service object.

    Each keyword names a method and scripts what it does::

        stub = Stub(
            SomeService,
            get_next_stuff=[Value(stuff), Value(None)],
            do_stuff=Fail("Failure"),
        )

    A script may be an ``OutcomeSequencer``, a ``SequenceBuilder``, a list of
    outcomes (fail closed once spent) or a single outcome, which repeats on
    every call. With ``spec`` the names are checked against it and coroutine
    functions become awaitable methods.

    The stub's own helpers are ``stub_calls``, ``scripted_methods``,
    ``reset_stub`` and ``assert_all_consumed``; those names, and names starting
    with an underscore, cannot be scripted.
    """

    def __init__(self, spec: Any = None, **methods: Any):
        self._spec = spec
        self._methods: dict[str, ScriptedMethod] = {}
        self.stub_calls: list[tuple[str, Call]] = []

        for name, script in methods.items():
            self._methods[name] = self._make_method(name, script)

    def __getattr__(self, name: str) -> ScriptedMethod:
        if name.startswith("_"):
            raise AttributeError(name)
        methods = self.__dict__.get("_methods", {})
        if name in methods:
            return methods[name]
        raise AttributeError(f"{self._label()} has no scripted method {name!r}")

    @property
    def scripted_methods(self) -> dict[str, ScriptedMethod]:
        return dict(self._methods)

    def reset_stub(self) -> None:
        for method in self._methods.values():
            method.reset()
        self.stub_calls.clear()

    def assert_all_consumed(self) -> None:
        for method in self._methods.values():
            method.sequencer.assert_consumed()

    def _make_method(self, name: str, script: Any) -> ScriptedMethod:
        if name.startswith("_") or name == "stub_calls" or hasattr(Stub, name):
            raise ConfigurationError(f"Cannot script reserved attribute {name!r}")

        is_async = False
        if self._spec is not None:
            if not hasattr(self._spec, name):
                raise ConfigurationError(f"{self._label()} has no attribute {name!r} to script")
            is_async = inspect.iscoroutinefunction(getattr(self._spec, name))

        sequencer = self._to_sequencer(f"{self._label()}.{name}", script)
        method_cls = AsyncScriptedMethod if is_async else ScriptedMethod
        return method_cls(sequencer, name=name, on_call=self._on_call)

    def _on_call(self, name: str, call: Call) -> None:
        self.stub_calls.append((name, call))

    def _label(self) -> str:
        if self._spec is None:
            return "Stub"
        spec_name = getattr(self._spec, "__name__", type(self._spec).__name__)
        return f"Stub({spec_name})"

    @staticmethod
    def _to_sequencer(label: str, script: Any) -> OutcomeSequencer:
        if isinstance(script, OutcomeSequencer):
            return script
        if isinstance(script, SequenceBuilder):
            return script.build()
        if isinstance(script, (Value, Fail)):
            return OutcomeSequencer([script], mode=ExhaustionMode.REPEAT_LAST, name=label)
        if isinstance(script, (list, tuple)):
            return OutcomeSequencer(script, name=label)
        raise ConfigurationError(
            f"{label}: cannot script with {type(script).__name__}; "
            "use an outcome, a list of outcomes, a SequenceBuilder or an OutcomeSequencer"
        )
