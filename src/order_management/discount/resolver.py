"""Best-discount resolution over a pluggable rule set."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

import structlog

from order_management.discount.rules import DEFAULT_RULES, DiscountRule
from order_management.shared.money import ZERO, line_total, money_sum

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DiscountResult:
    amount: Decimal = ZERO
    discount_type: str | None = None
    rule_name: str | None = None

    @property
    def applied(self) -> bool:
        return self.amount > ZERO and self.discount_type is not None


NO_DISCOUNT = DiscountResult()


class DiscountResolver:
    """Picks the single most valuable applicable discount.

    Rules are evaluated in registration order; a later rule replaces the
    current best only with a strictly greater amount.
    """

    def __init__(self, rules: Iterable[DiscountRule] = DEFAULT_RULES) -> None:
        self.rules: tuple[DiscountRule, ...] = tuple(rules)

    def calculate_best_discount(self, customer, items: Sequence) -> DiscountResult:
        total = money_sum(line_total(item.quantity, item.unit_price) for item in items)

        best_rule = None
        best_amount = None
        for rule in self.rules:
            if not rule.is_applicable(customer, items):
                continue
            amount = rule.calculate(customer, items, total)
            if best_amount is None or amount > best_amount:
                best_rule, best_amount = rule, amount

        if best_rule is None:
            return NO_DISCOUNT

        logger.debug(
            "Discount selected",
            rule=best_rule.name,
            amount=str(best_amount),
            order_total=str(total),
        )
        return DiscountResult(amount=best_amount, discount_type=best_rule.description, rule_name=best_rule.name)
