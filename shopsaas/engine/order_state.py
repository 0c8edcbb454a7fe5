"""Order status state machine."""

from enum import Enum

from shopsaas.errors import InvalidOrderStateTransitionError


class OrderStatus(str, Enum):
    """Order lifecycle stages."""

    PENDING = "PENDING"
    PAID = "PAID"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# DELIVERED and CANCELLED are terminal.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, nxt in ALLOWED_TRANSITIONS.items() if not nxt)


def allowed_transitions(status: OrderStatus) -> frozenset[OrderStatus]:
    """Statuses reachable in one step from `status`."""
    return ALLOWED_TRANSITIONS[OrderStatus(status)]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return OrderStatus(target) in allowed_transitions(current)


def ensure_transition(current: OrderStatus, target: OrderStatus) -> OrderStatus:
    """
    Validate current -> target and return the target status.
    Raises InvalidOrderStateTransitionError carrying both states otherwise.
    """
    current = OrderStatus(current)
    target = OrderStatus(target)
    if not can_transition(current, target):
        raise InvalidOrderStateTransitionError(current, target)
    return target
