"""Repository for the Customer aggregate."""

from protean.exceptions import ObjectNotFoundError

from order_management.customer.customer import Customer
from order_management.domain import order_management


@order_management.repository(part_of=Customer)
class CustomerRepository:
    def find_by_id(self, customer_id) -> Customer | None:
        """Customer with ``customer_id``, or ``None`` when absent."""
        try:
            return self.get(str(customer_id))
        except ObjectNotFoundError:
            return None

    def count(self) -> int:
        return self._dao.query.all().total
