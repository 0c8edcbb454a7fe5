"""Unit tests for the order status state machine."""

import itertools

import pytest

from shopsaas.engine.order_state import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    OrderStatus,
    allowed_transitions,
    can_transition,
    ensure_transition,
)
from shopsaas.errors import InvalidOrderStateTransitionError

ALL_PAIRS = list(itertools.product(OrderStatus, repeat=2))
VALID_PAIRS = [(c, t) for c, t in ALL_PAIRS if t in ALLOWED_TRANSITIONS[c]]
INVALID_PAIRS = [(c, t) for c, t in ALL_PAIRS if t not in ALLOWED_TRANSITIONS[c]]


def test_adjacency():
    """Test the documented lifecycle edges."""
    assert allowed_transitions(OrderStatus.PENDING) == {OrderStatus.PAID, OrderStatus.CANCELLED}
    assert allowed_transitions(OrderStatus.PAID) == {
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.CANCELLED,
    }
    assert allowed_transitions(OrderStatus.PROCESSING) == {
        OrderStatus.SHIPPED,
        OrderStatus.CANCELLED,
    }
    assert allowed_transitions(OrderStatus.SHIPPED) == {OrderStatus.DELIVERED}
    assert len(VALID_PAIRS) == 8


def test_terminal_statuses():
    """Test DELIVERED and CANCELLED have no outgoing edges."""
    assert TERMINAL_STATUSES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


@pytest.mark.parametrize("current,target", VALID_PAIRS)
def test_valid_transition(current, target):
    assert can_transition(current, target)
    assert ensure_transition(current, target) is target


@pytest.mark.parametrize("current,target", INVALID_PAIRS)
def test_invalid_transition_carries_both_states(current, target):
    assert not can_transition(current, target)
    with pytest.raises(InvalidOrderStateTransitionError) as exc_info:
        ensure_transition(current, target)
    err = exc_info.value
    assert err.current is current
    assert err.target is target
    assert err.details == {"current": current.value, "target": target.value}
    assert err.status_code == 409


def test_self_transition_rejected():
    """Test no status may transition to itself."""
    for status in OrderStatus:
        assert not can_transition(status, status)


def test_accepts_plain_strings():
    """Test values read back from storage are coerced."""
    assert ensure_transition("SHIPPED", "DELIVERED") is OrderStatus.DELIVERED
