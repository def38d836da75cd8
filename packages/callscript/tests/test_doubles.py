"""Tests for scripted methods, stubs and recording wrappers."""

import inspect

import pytest

from callscript.builder import SequenceBuilder
from callscript.config import ExhaustionMode
from callscript.doubles import (
    AsyncScriptedMethod,
    Call,
    RecordingCallable,
    ScriptedMethod,
    Stub,
)
from callscript.errors import ConfigurationError, ConfiguredFailure, ExhaustedError
from callscript.outcome import Fail, Value, capture
from callscript.sequencer import OutcomeSequencer


class Repository:
    def load(self, key: str) -> dict:
        raise NotImplementedError

    def save(self, key: str, value: dict) -> None:
        raise NotImplementedError

    async def fetch(self, key: str) -> dict:
        raise NotImplementedError


class Cache:
    def reset(self) -> None:
        raise NotImplementedError

    def calls(self) -> int:
        raise NotImplementedError

    def methods(self) -> list:
        raise NotImplementedError


class TestScriptedMethod:
    def test_records_arguments_and_outcome(self):
        method = ScriptedMethod(OutcomeSequencer([Value(1)], mode="fail_closed"), name="load")

        assert method("a", flag=True) == 1
        assert method.call_count == 1
        assert method.calls[0] == Call(("a",), {"flag": True}, Value(1))

    def test_failure_is_recorded_then_raised(self):
        method = ScriptedMethod(OutcomeSequencer([Fail("Failure")], mode="fail_closed"))

        with pytest.raises(ConfiguredFailure, match="Failure"):
            method()
        assert method.calls[0].outcome == Fail("Failure")

    def test_exhaustion_is_recorded(self):
        method = ScriptedMethod(OutcomeSequencer([], mode="fail_closed"))

        with pytest.raises(ExhaustedError):
            method()
        assert isinstance(method.calls[0].outcome.error, ExhaustedError)

    def test_name_defaults_to_sequencer_name(self):
        method = ScriptedMethod(OutcomeSequencer([Value(1)], mode="fail_closed", name="get"))
        assert method.name == "get"
        assert repr(method) == "ScriptedMethod('get', calls=0)"

    def test_reset_clears_calls_and_cursor(self):
        method = ScriptedMethod(OutcomeSequencer([Value(1)], mode="fail_closed"))
        method()
        method.reset()
        assert method.calls == []
        assert method() == 1

    async def test_async_variant_is_awaitable(self):
        method = AsyncScriptedMethod(OutcomeSequencer([Value("x")], mode="fail_closed"))
        assert await method() == "x"
        assert method.call_count == 1


class TestStub:
    def test_methods_answer_from_scripts(self):
        stub = Stub(
            load=[Value({"id": 1}), Value(None)],
            save=Fail("disk full"),
        )

        assert stub.load("k") == {"id": 1}
        assert stub.load("k") is None
        with pytest.raises(ConfiguredFailure, match="disk full"):
            stub.save("k", {})
        with pytest.raises(ConfiguredFailure, match="disk full"):
            stub.save("k", {})

    def test_single_outcome_repeats(self):
        stub = Stub(load=Value("same"))
        assert stub.load.sequencer.mode is ExhaustionMode.REPEAT_LAST
        assert [stub.load() for _ in range(3)] == ["same"] * 3

    def test_accepts_sequencer_and_builder(self):
        sequencer = OutcomeSequencer([Value(1)], mode="fail_closed")
        stub = Stub(load=sequencer, save=SequenceBuilder().returns(None))

        assert stub.load.sequencer is sequencer
        assert stub.save("k", {}) is None

    def test_list_scripts_get_qualified_names(self):
        stub = Stub(Repository, load=[Value(1)])
        assert stub.load.sequencer.name == "Stub(Repository).load"

    def test_global_call_order(self):
        stub = Stub(load=Value(1), save=Value(None))
        stub.load("a")
        stub.save("a", {"x": 1})
        stub.load("b")

        assert [name for name, _ in stub.stub_calls] == ["load", "save", "load"]
        assert stub.stub_calls[1][1].args == ("a", {"x": 1})

    def test_unconfigured_method_raises_attribute_error(self):
        stub = Stub(load=Value(1))
        with pytest.raises(AttributeError, match="no scripted method 'delete'"):
            stub.delete()

    def test_spec_rejects_unknown_names(self):
        with pytest.raises(ConfigurationError, match="Stub\\(Repository\\) has no attribute 'drop'"):
            Stub(Repository, drop=Value(1))

    def test_spec_coroutines_become_async(self):
        stub = Stub(Repository, fetch=Value({"id": 2}), load=Value({"id": 1}))
        assert isinstance(stub.fetch, AsyncScriptedMethod)
        assert not isinstance(stub.load, AsyncScriptedMethod)
        assert inspect.iscoroutinefunction(type(stub.fetch).__call__)

    async def test_async_method_dispenses(self):
        stub = Stub(Repository, fetch=[Fail(TimeoutError("slow")), Value({"id": 2})])
        with pytest.raises(TimeoutError):
            await stub.fetch("k")
        assert await stub.fetch("k") == {"id": 2}

    @pytest.mark.parametrize("name", ["reset_stub", "stub_calls", "scripted_methods", "assert_all_consumed", "_private"])
    def test_reserved_names_rejected(self, name):
        with pytest.raises(ConfigurationError, match="reserved"):
            Stub(**{name: Value(1)})

    def test_common_service_method_names_can_be_scripted(self):
        stub = Stub(Cache, reset=Value(None), calls=[Value(3)], methods=Value(["get"]))

        assert stub.reset() is None
        assert stub.calls() == 3
        assert stub.methods() == ["get"]
        assert [name for name, _ in stub.stub_calls] == ["reset", "calls", "methods"]

    def test_unsupported_script_rejected(self):
        with pytest.raises(ConfigurationError, match="cannot script with int"):
            Stub(load=5)

    def test_reset_and_assert_consumed(self):
        stub = Stub(load=[Value(1), Value(2)])
        stub.load()
        with pytest.raises(AssertionError, match="1 of 2"):
            stub.assert_all_consumed()

        stub.reset_stub()
        assert stub.stub_calls == []
        assert stub.load() == 1
        stub.load()
        stub.assert_all_consumed()

    def test_methods_mapping(self):
        stub = Stub(load=Value(1))
        assert list(stub.scripted_methods) == ["load"]


class TestRecordingCallable:
    def test_records_success(self):
        recorder = RecordingCallable(lambda x: x * 2)
        assert recorder(3) == 6
        assert recorder.history == [Call((3,), {}, Value(6))]

    def test_records_and_reraises_failure(self):
        error = ValueError("bad")

        def explode():
            raise error

        recorder = RecordingCallable(explode)
        with pytest.raises(ValueError) as exc_info:
            recorder()
        assert exc_info.value is error
        assert recorder.history[0].outcome == Fail(error)

    def test_wraps_a_stub_method(self):
        stub = Stub(load=[Fail("Failure"), Value("Real")])
        recorder = RecordingCallable(stub.load)

        with pytest.raises(ConfiguredFailure):
            recorder("k")
        assert recorder("k") == "Real"
        assert [c.outcome.kind.value for c in recorder.history] == ["failure", "value"]


def _traceback_depth(error: BaseException) -> int:
    depth = 0
    tb = error.__traceback__
    while tb is not None:
        depth += 1
        tb = tb.tb_next
    return depth


def test_repeated_exception_traceback_does_not_accumulate():
    error = RuntimeError("Failure")
    stub = Stub(do_stuff=Fail(error))

    depths = []
    for _ in range(4):
        outcome = capture(stub.do_stuff)
        assert outcome.error is error
        depths.append(_traceback_depth(outcome.error))

    assert len(set(depths)) == 1
