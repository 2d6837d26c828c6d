"""Order status state machine.

    Pending → Processing → Shipped → Delivered
       ↓          ↓           ↓
    Cancelled  Cancelled   Returned

Delivered, Cancelled and Returned are terminal. Status never moves backwards
and no status transitions to itself.
"""

from enum import Enum


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    RETURNED = "Returned"


INITIAL_STATUS = OrderStatus.PENDING

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.RETURNED})

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.RETURNED}),
    OrderStatus.DELIVERED: frozenset(),  # Terminal
    OrderStatus.CANCELLED: frozenset(),  # Terminal
    OrderStatus.RETURNED: frozenset(),  # Terminal
}


def valid_transitions_from(status: OrderStatus) -> frozenset[OrderStatus]:
    """Statuses reachable in one step from ``status``."""
    return _VALID_TRANSITIONS[OrderStatus(status)]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return OrderStatus(target) in valid_transitions_from(current)


def parse_status(value) -> OrderStatus | None:
    """Resolve an enum member, its value or its name (case-insensitive).

    Returns ``None`` for anything unrecognised.
    """
    if isinstance(value, OrderStatus):
        return value
    if not isinstance(value, str):
        return None

    candidate = value.strip().lower()
    for status in OrderStatus:
        if candidate in (status.value.lower(), status.name.lower()):
            return status
    return None
