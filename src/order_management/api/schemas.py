"""Pydantic request/response schemas for the Orders API.

These are external contracts, kept separate from the request objects and
views the use cases work with.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: str | None = None
    quantity: int
    unit_price: Decimal


class CreateOrderSchema(BaseModel):
    customer_id: str | None = None
    items: list[OrderItemSchema] = []

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": "c7b3f8e2-9a4d-4c5e-b8f1-3e7a9b2c4d5f",
                    "items": [
                        {"product_id": "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d", "quantity": 2, "unit_price": "49.99"}
                    ],
                }
            ]
        }
    }


class UpdateOrderStatusSchema(BaseModel):
    new_status: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ApiResponse(BaseModel):
    """Envelope shared by every endpoint."""

    success: bool
    data: Any = None
    message: str | None = None
    errors: list[str] | None = None


class PlacedOrderSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    total_amount: Decimal
    discount_amount: Decimal
    discounted_amount: Decimal
    discount_type: str | None = None


class StatusChangeSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    new_status: str


class OrderItemView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: str
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class OrderDetailSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    customer_id: str
    total_amount: Decimal
    discount_amount: Decimal
    discounted_amount: Decimal
    discount_type: str | None = None
    status: str
    created_at: datetime
    fulfilled_at: datetime | None = None
    items: list[OrderItemView]
    valid_next_statuses: list[str]


class OrderSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    customer_id: str
    total_amount: Decimal
    discounted_amount: Decimal
    status: str
    created_at: datetime
    fulfilled_at: datetime | None = None
    item_count: int


class OrderPageSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    orders: list[OrderSummarySchema]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class AnalyticsSchema(BaseModel):
    total_orders: int
    total_revenue: Decimal
    average_order_value: Decimal
    average_fulfillment_time_hours: Decimal
    orders_by_status: dict[str, int]
    generated_at: datetime | None = None

    @classmethod
    def from_snapshot(cls, snapshot) -> "AnalyticsSchema":
        return cls(
            total_orders=snapshot.total_orders,
            total_revenue=snapshot.total_revenue,
            average_order_value=snapshot.average_order_value,
            average_fulfillment_time_hours=snapshot.average_fulfillment_time_hours,
            orders_by_status=dict(snapshot.orders_by_status),
            generated_at=snapshot.generated_at,
        )


class StatusTransitionsSchema(BaseModel):
    status: str
    valid_transitions: list[str]
    terminal: bool
