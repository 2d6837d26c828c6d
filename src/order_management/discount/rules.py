"""Discount rules.

A rule is a strategy entry: a name, a human-readable description, a predicate
deciding whether it applies to a customer's order, and a calculator producing
the discount amount. The resolver only ever sees this shape, so new rules are
added by registering another entry.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from order_management.shared.money import percentage_of

Predicate = Callable[[object, Sequence], bool]
Calculator = Callable[[object, Sequence, Decimal], Decimal]

DEFAULT_BULK_THRESHOLD = 10


@dataclass(frozen=True)
class DiscountRule:
    name: str
    description: str
    is_applicable: Predicate
    calculate: Calculator


def percentage_rule(name: str, rate: str, predicate: Predicate, description: str | None = None) -> DiscountRule:
    """A rule granting ``rate`` (e.g. ``"0.15"``) of the order total."""
    pct = Decimal(rate)
    return DiscountRule(
        name=name,
        description=description or f"{pct * 100:.0f}% discount applied",
        is_applicable=predicate,
        calculate=lambda _customer, _items, total: percentage_of(total, pct),
    )


def total_quantity(items: Sequence) -> int:
    return sum(item.quantity for item in items)


def _is_first_time(customer, _items) -> bool:
    return bool(customer.is_first_time)


def _is_vip(customer, _items) -> bool:
    return bool(customer.is_vip)


def bulk_order_rule(threshold: int = DEFAULT_BULK_THRESHOLD) -> DiscountRule:
    """15% off when the order holds at least ``threshold`` units in total."""
    return percentage_rule(
        "Bulk Order",
        "0.15",
        lambda _customer, items: total_quantity(items) >= threshold,
    )


FIRST_TIME_BUYER = percentage_rule("First Time Buyer", "0.10", _is_first_time)
BULK_ORDER = bulk_order_rule()
VIP_CUSTOMER = percentage_rule("VIP Customer", "0.20", _is_vip)

# Registration order doubles as the tie-break order.
DEFAULT_RULES = (FIRST_TIME_BUYER, BULK_ORDER, VIP_CUSTOMER)


def default_rules(bulk_threshold: int = DEFAULT_BULK_THRESHOLD) -> tuple[DiscountRule, ...]:
    if bulk_threshold == DEFAULT_BULK_THRESHOLD:
        return DEFAULT_RULES
    return (FIRST_TIME_BUYER, bulk_order_rule(bulk_threshold), VIP_CUSTOMER)
