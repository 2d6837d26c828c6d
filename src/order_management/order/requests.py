"""Request objects accepted by the order use cases."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemRequest:
    product_id: str | None
    quantity: int
    unit_price: Decimal | float | str


@dataclass(frozen=True)
class CreateOrderRequest:
    customer_id: str | None
    items: tuple[OrderItemRequest, ...] = ()


@dataclass(frozen=True)
class UpdateOrderStatusRequest:
    order_id: str | None
    new_status: str | None


@dataclass(frozen=True)
class GetOrderRequest:
    order_id: str | None


@dataclass(frozen=True)
class ListOrdersRequest:
    page: int = 1
    page_size: int = 10
    status: str | None = None


@dataclass(frozen=True)
class GetAnalyticsRequest:
    pass
