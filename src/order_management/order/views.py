"""Read-side views of orders returned by the use cases.

Views are immutable snapshots detached from the aggregate, safe to hand to
any adapter.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from order_management.order.order import Order, OrderItem


@dataclass(frozen=True)
class OrderItemView:
    item_id: str
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    @classmethod
    def from_item(cls, item: OrderItem) -> "OrderItemView":
        return cls(
            item_id=str(item.id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            unit_price=item.price,
            line_total=item.line_total,
        )


@dataclass(frozen=True)
class OrderDetail:
    order_id: str
    customer_id: str
    total_amount: Decimal
    discount_amount: Decimal
    discounted_amount: Decimal
    discount_type: str | None
    status: str
    created_at: datetime
    fulfilled_at: datetime | None
    items: tuple[OrderItemView, ...]
    valid_next_statuses: tuple[str, ...]

    @classmethod
    def from_order(cls, order: Order) -> "OrderDetail":
        return cls(
            order_id=str(order.id),
            customer_id=str(order.customer_id),
            total_amount=order.total_value,
            discount_amount=order.discount_value,
            discounted_amount=order.net_value,
            discount_type=order.discount_type,
            status=order.status,
            created_at=order.created_at,
            fulfilled_at=order.fulfilled_at,
            items=tuple(OrderItemView.from_item(item) for item in order.items or ()),
            valid_next_statuses=tuple(status.value for status in order.valid_next_statuses),
        )


@dataclass(frozen=True)
class OrderSummary:
    order_id: str
    customer_id: str
    total_amount: Decimal
    discounted_amount: Decimal
    status: str
    created_at: datetime
    fulfilled_at: datetime | None
    item_count: int

    @classmethod
    def from_order(cls, order: Order) -> "OrderSummary":
        return cls(
            order_id=str(order.id),
            customer_id=str(order.customer_id),
            total_amount=order.total_value,
            discounted_amount=order.net_value,
            status=order.status,
            created_at=order.created_at,
            fulfilled_at=order.fulfilled_at,
            item_count=order.item_count,
        )


@dataclass(frozen=True)
class OrderPage:
    orders: tuple[OrderSummary, ...]
    total_count: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, orders, total_count: int, page: int, page_size: int) -> "OrderPage":
        return cls(
            orders=tuple(OrderSummary.from_order(order) for order in orders),
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total_count / page_size),
        )


@dataclass(frozen=True)
class PlacedOrder:
    order_id: str
    total_amount: Decimal
    discount_amount: Decimal
    discounted_amount: Decimal
    discount_type: str | None


@dataclass(frozen=True)
class StatusChange:
    order_id: str
    new_status: str
