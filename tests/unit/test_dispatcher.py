"""Unit tests for Dispatcher in immediate and deferred mode."""

import asyncio
from typing import Any, List

import pytest

from filterkit.dispatcher import Dispatcher
from filterkit.errors import DeferredModeError, UnknownFilterError, UnknownOptionError
from filterkit.models import FilterDescriptor, FilterOutcome
from filterkit.registry import FilterRegistry


# -----------------------------------------------------------------------------
# Immediate mode
# -----------------------------------------------------------------------------


def test_loaded_filters_are_listed(loaded_registry: FilterRegistry) -> None:
    assert "add" in loaded_registry.list()
    assert "even" in loaded_registry.list()


def test_validate_rejects_non_number(dispatcher: Dispatcher) -> None:
    with pytest.raises(ValueError, match="Number expected"):
        dispatcher.validate("x", "add")


def test_validate_accepts_number(dispatcher: Dispatcher) -> None:
    assert dispatcher.validate(2, "add") is None


def test_sanitize_with_override(dispatcher: Dispatcher) -> None:
    assert dispatcher.sanitize(2, "add", {"value": 3}) == 5


def test_sanitize_with_default(dispatcher: Dispatcher) -> None:
    assert dispatcher.sanitize(2, "add") == 2


def test_sanitize_output_revalidates(dispatcher: Dispatcher) -> None:
    sanitized = dispatcher.sanitize(2.5, "add", {"value": 1})
    dispatcher.validate(sanitized, "add")


def test_sanitize_falls_back_to_validate(dispatcher: Dispatcher) -> None:
    assert dispatcher.sanitize(4, "even") == 4
    with pytest.raises(ValueError):
        dispatcher.sanitize(3, "even")


def test_unknown_filter(dispatcher: Dispatcher) -> None:
    with pytest.raises(UnknownFilterError):
        dispatcher.validate(1, "missing")


def test_unknown_option(dispatcher: Dispatcher) -> None:
    with pytest.raises(UnknownOptionError):
        dispatcher.sanitize(1, "add", {"valeu": 3})


def test_registered_noop_filter(loaded_registry: FilterRegistry, dispatcher: Dispatcher) -> None:
    assert loaded_registry.add("fake", {"validate": lambda value, options: None}) is True
    assert "fake" in loaded_registry.list()
    dispatcher.validate(None, "fake")


def test_ad_hoc_descriptor_bypasses_registry(dispatcher: Dispatcher, loaded_registry: FilterRegistry) -> None:
    seen: List[Any] = []
    descriptor = FilterDescriptor(validate=lambda value, options: seen.append((value, options)))
    dispatcher.validate("v", descriptor)
    assert seen == [("v", {})]
    assert len(loaded_registry) == 2


def test_ad_hoc_mapping_and_callable(dispatcher: Dispatcher) -> None:
    assert dispatcher.sanitize(" a ", {"validate": lambda v, o: None, "sanitize": lambda v, o: v.strip()}) == "a"
    dispatcher.validate(1, lambda v, o: None)


def test_filter_receives_resolved_options(registry: FilterRegistry) -> None:
    received = {}

    def validate(value, options):
        received.update(options)

    registry.add("capture", validate, {"a": {"default": 1}, "b": {}})
    Dispatcher(registry).validate("x", "capture", {"b": 2})
    assert received == {"a": 1, "b": 2}


def test_deferred_without_loop_raises(dispatcher: Dispatcher) -> None:
    with pytest.raises(DeferredModeError):
        dispatcher.validate(1, "add", callback=lambda err, value: None)


# -----------------------------------------------------------------------------
# Deferred mode
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_deferred_validate_runs_after_caller_returns(dispatcher: Dispatcher) -> None:
    calls: List[Any] = []
    future = dispatcher.validate(1, "add", callback=lambda err, value: calls.append((err, value)))
    assert calls == []
    outcome = await future
    assert calls == [(None, 1)]
    assert isinstance(outcome, FilterOutcome)
    assert outcome.is_ok()
    assert outcome.value == 1


@pytest.mark.asyncio
async def test_deferred_validate_failure_goes_to_callback(dispatcher: Dispatcher) -> None:
    calls: List[Any] = []
    future = dispatcher.validate("x", "add", callback=lambda err, value: calls.append((err, value)))
    outcome = await future
    assert len(calls) == 1
    error, value = calls[0]
    assert isinstance(error, ValueError)
    assert value == "x"
    assert outcome.status == "fail"
    assert outcome.error is error


@pytest.mark.asyncio
async def test_deferred_sanitize_delivers_three_arguments(dispatcher: Dispatcher) -> None:
    calls: List[Any] = []
    await dispatcher.sanitize(2, "add", {"value": 3}, callback=lambda *args: calls.append(args))
    await dispatcher.sanitize("x", "add", callback=lambda *args: calls.append(args))
    assert calls[0] == (None, 5, 2)
    error, sanitized, original = calls[1]
    assert isinstance(error, ValueError)
    assert sanitized is None
    assert original == "x"


@pytest.mark.asyncio
async def test_deferred_resolution_errors_go_to_callback(dispatcher: Dispatcher) -> None:
    calls: List[Any] = []
    f1 = dispatcher.validate(1, "missing", callback=lambda err, value: calls.append(err))
    f2 = dispatcher.sanitize(1, "add", {"bogus": 1}, callback=lambda err, s, o: calls.append(err))
    await asyncio.gather(f1, f2)
    assert isinstance(calls[0], UnknownFilterError)
    assert isinstance(calls[1], UnknownOptionError)


@pytest.mark.asyncio
async def test_deferred_calls_run_in_fifo_order(dispatcher: Dispatcher) -> None:
    order: List[int] = []
    futures = [
        dispatcher.sanitize(i, "add", {"value": 10}, callback=lambda err, s, o: order.append(o))
        for i in range(5)
    ]
    await asyncio.gather(*futures)
    assert order == [0, 1, 2, 3, 4]


@pytest.mark.asyncio
async def test_deferred_callback_called_exactly_once(dispatcher: Dispatcher) -> None:
    calls: List[Any] = []
    future = dispatcher.validate(2, "even", callback=lambda err, value: calls.append(value))
    await future
    await asyncio.sleep(0)
    assert calls == [2]


@pytest.mark.asyncio
async def test_deferred_callback_error_is_contained(dispatcher: Dispatcher) -> None:
    def explode(err, value):
        raise RuntimeError("callback bug")

    outcome = await dispatcher.validate(2, "even", callback=explode)
    assert outcome.is_ok()


@pytest.mark.asyncio
async def test_avalidate_returns_outcome(dispatcher: Dispatcher) -> None:
    ok = await dispatcher.avalidate(4, "even")
    bad = await dispatcher.avalidate(3, "even")
    assert ok.is_ok() and ok.unwrap() == 4
    assert not bad.is_ok()
    with pytest.raises(ValueError):
        bad.unwrap()


@pytest.mark.asyncio
async def test_asanitize_returns_outcome(dispatcher: Dispatcher) -> None:
    outcome = await dispatcher.asanitize(2, "add", {"value": 3})
    assert outcome.operation == "sanitize"
    assert outcome.original == 2
    assert outcome.unwrap() == 5


def test_deferred_without_loop_schedules_nothing(dispatcher: Dispatcher) -> None:
    calls: List[Any] = []
    with pytest.raises(DeferredModeError, match="running asyncio event loop"):
        dispatcher.sanitize(1, "add", callback=lambda *args: calls.append(args))
    assert calls == []
