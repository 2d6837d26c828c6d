"""Reference customers and historical orders.

Loaded into an empty store so the API has something to show. Orders are
rebuilt through ``Order.restore`` and go through the aggregate's validation
and invariants like any other order.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog
from protean.utils.globals import current_domain

from order_management.customer.customer import Customer, CustomerSegment
from order_management.customer.repository import CustomerRepository
from order_management.order.order import Order

logger = structlog.get_logger(__name__)

JOHN_DOE = "2585a176-1e69-4d3c-b174-9da5f5521505"
JANE_SMITH = "8f4e2c1d-5a7b-4e9f-a3c2-7b8d4e5f6a9c"
ALICE_JOHNSON = "c7b3f8e2-9a4d-4c5e-b8f1-3e7a9b2c4d5f"
BOB_WILSON = "d4a8c2e7-3b5f-4e1d-9c7a-6f2b8e4a7c9d"
EMMA_DAVIS = "f9e3b7c1-4d6a-4f2e-8b5c-1a9f3c7e2b4d"

REFERENCE_CUSTOMERS = (
    {"id": JOHN_DOE, "name": "John Doe", "email": "john.doe@example.com", "segment": CustomerSegment.REGULAR},
    {"id": JANE_SMITH, "name": "Jane Smith", "email": "jane.smith@example.com", "segment": CustomerSegment.PREMIUM},
    {"id": ALICE_JOHNSON, "name": "Alice Johnson", "email": "alice.johnson@example.com", "segment": CustomerSegment.VIP},
    {
        "id": BOB_WILSON,
        "name": "Bob Wilson",
        "email": "bob.wilson@example.com",
        "segment": CustomerSegment.REGULAR,
        "is_first_time": True,
    },
    {"id": EMMA_DAVIS, "name": "Emma Davis", "email": "emma.davis@example.com", "segment": CustomerSegment.PREMIUM},
)

_LAPTOP = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"
_MOUSE = "b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d6e"
_KEYBOARD = "c3d4e5f6-a7b8-4c9d-0e1f-2a3b4c5d6e7f"
_MONITOR = "d4e5f6a7-b8c9-4d0e-1f2a-3b4c5d6e7f8a"
_CABLE = "e5f6a7b8-c9d0-4e1f-2a3b-4c5d6e7f8a9b"


def _reference_orders(now: datetime) -> tuple[dict, ...]:
    return (
        {
            "order_id": "11111111-1111-4111-8111-111111111111",
            "customer_id": JOHN_DOE,
            "status": "Delivered",
            "items": [
                {"product_id": _MOUSE, "quantity": 2, "unit_price": "50.00"},
                {"product_id": _CABLE, "quantity": 1, "unit_price": "25.50"},
            ],
            "total_amount": "125.50",
            "discounted_amount": "125.50",
            "created_at": now - timedelta(days=10),
            "fulfilled_at": now - timedelta(days=7),
        },
        {
            "order_id": "22222222-2222-4222-8222-222222222222",
            "customer_id": JANE_SMITH,
            "status": "Shipped",
            "items": [{"product_id": _KEYBOARD, "quantity": 3, "unit_price": "99.99"}],
            "total_amount": "299.97",
            "discounted_amount": "299.97",
            "created_at": now - timedelta(days=5),
        },
        {
            "order_id": "33333333-3333-4333-8333-333333333333",
            "customer_id": ALICE_JOHNSON,
            "status": "Processing",
            "items": [{"product_id": _LAPTOP, "quantity": 1, "unit_price": "600.00"}],
            "total_amount": "600.00",
            "discounted_amount": "480.00",
            "discount_type": "20% discount applied",
            "created_at": now - timedelta(days=2),
        },
        {
            "order_id": "44444444-4444-4444-8444-444444444444",
            "customer_id": BOB_WILSON,
            "status": "Pending",
            "items": [{"product_id": _CABLE, "quantity": 12, "unit_price": "10.00"}],
            "total_amount": "120.00",
            "discounted_amount": "102.00",
            "discount_type": "15% discount applied",
            "created_at": now - timedelta(days=1),
        },
        {
            "order_id": "55555555-5555-4555-8555-555555555555",
            "customer_id": EMMA_DAVIS,
            "status": "Cancelled",
            "items": [{"product_id": _MONITOR, "quantity": 1, "unit_price": "45.00"}],
            "total_amount": "45.00",
            "discounted_amount": "45.00",
            "created_at": now - timedelta(days=3),
        },
    )


@dataclass(frozen=True)
class SeedResult:
    customers: int
    orders: int

    @property
    def seeded(self) -> bool:
        return bool(self.customers or self.orders)


def seed_reference_data(now: datetime | None = None) -> SeedResult:
    """Load the reference data unless customers already exist."""
    customer_repo: CustomerRepository = current_domain.repository_for(Customer)
    if customer_repo.count() > 0:
        logger.info("Reference data already present, skipping seed")
        return SeedResult(customers=0, orders=0)

    now = now or datetime.now(UTC)
    for data in REFERENCE_CUSTOMERS:
        customer_repo.add(
            Customer(
                id=data["id"],
                name=data["name"],
                email=data["email"],
                segment=data["segment"].value,
                is_first_time=data.get("is_first_time", False),
                created_at=now - timedelta(days=30),
            )
        )

    order_repo = current_domain.repository_for(Order)
    orders = _reference_orders(now)
    for data in orders:
        order_repo.add(Order.restore(**data))

    logger.info("Reference data seeded", customers=len(REFERENCE_CUSTOMERS), orders=len(orders))
    return SeedResult(customers=len(REFERENCE_CUSTOMERS), orders=len(orders))
