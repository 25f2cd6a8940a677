"""
Unit tests for FlowState, Result and the truthiness convention.
"""

import pytest

from waterfall import MISSING, FlowState, FlowStatus, Result, falsy, truthy


def test_initial_state_is_open():
    state = FlowState()
    assert state.is_open()
    assert not state.is_blocked()
    assert state.status == FlowStatus.OPEN
    assert state.payload is None


def test_first_block_wins():
    state = FlowState()
    assert state.block("first")
    assert not state.block("second")

    assert state.is_blocked()
    assert state.payload == "first"


def test_trip_then_fill_records_payload_once():
    state = FlowState()
    assert state.trip()
    assert state.payload_pending
    assert state.payload is None

    assert state.fill("missing")
    assert not state.fill("again")
    assert not state.payload_pending
    assert state.payload == "missing"


def test_fill_on_open_state_is_a_no_op():
    state = FlowState()
    assert not state.fill("payload")
    assert state.is_open()


def test_trip_on_blocked_state_is_a_no_op():
    state = FlowState()
    state.block("cause")
    assert not state.trip()
    assert not state.fill("other")
    assert state.payload == "cause"


@pytest.mark.parametrize("value", [None, False, MISSING, Result.fail("nope")])
def test_falsy_values(value):
    assert falsy(value)
    assert not truthy(value)


@pytest.mark.parametrize("value", [True, 0, 0.0, "", [], {}, set(), "text", 42, Result.ok()])
def test_truthy_values(value):
    assert truthy(value)
    assert not falsy(value)


def test_result():
    success = Result.ok(7)
    assert success.is_success()
    assert not success.is_failure()
    assert success.data == 7
    assert str(success) == "Success"

    failure = Result.fail("Error message")
    assert failure.is_failure()
    assert failure.error == "Error message"
    assert str(failure) == "Failure: Error message"
    assert failure == Result.fail("Error message")
