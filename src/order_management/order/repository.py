"""Repository for the Order aggregate.

Adds the read-side queries on top of the standard ``get``/``add``: lookup
without raising, filtered and paged listing newest first, and a full scan for
analytics.
"""

from protean.exceptions import ObjectNotFoundError

from order_management.domain import order_management
from order_management.order.order import Order
from order_management.order.status import OrderStatus

_SCAN_BATCH_SIZE = 100


@order_management.repository(part_of=Order)
class OrderRepository:
    def find_by_id(self, order_id) -> Order | None:
        """Order with ``order_id``, or ``None`` when absent."""
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            return None

    def query_orders(
        self,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Order], int]:
        """One page of orders, newest first, with the total match count."""
        query = self._dao.query
        if status is not None:
            query = query.filter(status=status.value)
        result = query.order_by("-created_at").offset(offset).limit(limit).all()
        return list(result.items), result.total

    def all_orders(self) -> list[Order]:
        """Every order, read in batches."""
        orders = []
        offset = 0
        while True:
            result = self._dao.query.order_by("-created_at").offset(offset).limit(_SCAN_BATCH_SIZE).all()
            orders.extend(result.items)
            offset += _SCAN_BATCH_SIZE
            if not result.items or offset >= result.total:
                return orders
