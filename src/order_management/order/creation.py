"""Order creation: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from order_management.domain import order_management
from order_management.order.order import Order


@order_management.command(part_of="Order")
class CreateOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, unit_price}
    discount_amount = Float(default=0.0, min_value=0.0)
    discount_type = String(max_length=100)


@order_management.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.create(command.customer_id)
        order.add_line_items(items_data)
        order.apply_discount(command.discount_amount or 0.0, command.discount_type)

        current_domain.repository_for(Order).add(order)
        return str(order.id)
