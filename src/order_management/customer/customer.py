"""Customer aggregate: read-only reference data for discounting.

The order core never changes a customer; it only reads the segment and the
first-time-buyer flag when choosing a discount.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, String

from order_management.domain import order_management


class CustomerSegment(Enum):
    REGULAR = "Regular"
    PREMIUM = "Premium"
    VIP = "VIP"


@order_management.aggregate
class Customer:
    """A person who places orders.

    ``segment`` and ``is_first_time`` drive discount eligibility; ``name`` and
    ``email`` are descriptive only.
    """

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    segment = String(choices=CustomerSegment, default=CustomerSegment.REGULAR.value)
    is_first_time = Boolean(default=False)
    created_at = DateTime(default=lambda: datetime.now(UTC))

    @property
    def is_vip(self) -> bool:
        return self.segment == CustomerSegment.VIP.value
