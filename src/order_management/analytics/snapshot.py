"""Aggregate statistics over the full order set."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from order_management.order.status import OrderStatus
from order_management.shared.money import CENT, ZERO, money_sum, to_money

_SECONDS_PER_HOUR = Decimal(3600)


@dataclass(frozen=True)
class AnalyticsSnapshot:
    total_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
    average_fulfillment_time_hours: Decimal
    orders_by_status: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    generated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "total_orders": self.total_orders,
            "total_revenue": str(self.total_revenue),
            "average_order_value": str(self.average_order_value),
            "average_fulfillment_time_hours": str(self.average_fulfillment_time_hours),
            "orders_by_status": dict(self.orders_by_status),
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def compute_snapshot(orders: Iterable, now: datetime | None = None) -> AnalyticsSnapshot:
    """Summarise ``orders``.

    Revenue and the average order value use the discounted (net payable)
    amount. The average fulfillment time only covers orders that have been
    fulfilled. Every status appears in the breakdown, zero-filled.
    """
    orders = list(orders)
    generated_at = now or datetime.now(UTC)

    by_status = {status.value: 0 for status in OrderStatus}
    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1

    revenue = money_sum(order.discounted_amount or 0 for order in orders)
    average_value = (revenue / len(orders)).quantize(CENT, rounding=ROUND_HALF_UP) if orders else ZERO

    durations = [
        Decimal(str((_as_aware(order.fulfilled_at) - _as_aware(order.created_at)).total_seconds())) / _SECONDS_PER_HOUR
        for order in orders
        if order.fulfilled_at is not None
    ]
    average_hours = (sum(durations) / len(durations)).quantize(CENT, rounding=ROUND_HALF_UP) if durations else ZERO

    return AnalyticsSnapshot(
        total_orders=len(orders),
        total_revenue=to_money(revenue),
        average_order_value=average_value,
        average_fulfillment_time_hours=average_hours,
        orders_by_status=MappingProxyType(by_status),
        generated_at=generated_at,
    )
