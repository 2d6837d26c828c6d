"""Domain initialization and configuration.

The order management bounded context: customers (read-only reference data),
orders with their line items and status state machine, discount resolution,
and read-side reporting.
"""

from protean.domain import Domain

from order_management.utils.logging import configure_logging

configure_logging()

# Domain Composition Root
order_management = Domain(name="order_management")
