"""Order status progression: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from order_management.domain import order_management
from order_management.order.order import Order
from order_management.order.status import OrderStatus


@order_management.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    new_status = String(required=True, choices=OrderStatus)


@order_management.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(command.new_status)
        repo.add(order)
        return order.status
