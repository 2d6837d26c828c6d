"""Application tests for the CreateOrder use case."""

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest
from order_management.customer.customer import CustomerSegment
from order_management.discount.resolver import DiscountResolver
from order_management.discount.rules import percentage_rule
from order_management.order.order import Order
from order_management.order.requests import CreateOrderRequest, OrderItemRequest
from order_management.order.service import OrderService
from order_management.pipeline.response import ErrorKind
from order_management.pipeline.stages import PERSISTENCE_FAILURE_MESSAGE
from order_management.shared.exceptions import PersistenceFailure
from order_management.shared.money import MAX_AMOUNT
from protean.utils.globals import current_domain


def _request(customer_id, *lines):
    return CreateOrderRequest(
        customer_id=str(customer_id),
        items=tuple(OrderItemRequest(product_id=f"prod-{i}", quantity=q, unit_price=p) for i, (q, p) in enumerate(lines)),
    )


def _orders():
    return current_domain.repository_for(Order).all_orders()


@pytest.fixture()
def service():
    return OrderService()


class TestCreateOrder:
    def test_vip_customer_gets_twenty_percent(self, service, make_customer):
        customer = make_customer(CustomerSegment.VIP)

        response = service.create_order(_request(customer.id, (1, "600.00")))

        assert response.success is True
        assert response.data.total_amount == Decimal("600.00")
        assert response.data.discount_amount == Decimal("120.00")
        assert response.data.discounted_amount == Decimal("480.00")
        assert response.message == (
            f"Order created successfully with ID: {response.data.order_id} with 20% discount applied"
        )

    def test_regular_customer_small_order_has_no_discount(self, service, make_customer):
        customer = make_customer()

        response = service.create_order(_request(customer.id, (5, "50.00")))

        assert response.success is True
        assert response.data.discount_amount == Decimal("0.00")
        assert response.data.discount_type is None
        assert response.message == f"Order created successfully with ID: {response.data.order_id}"

    def test_order_is_persisted_pending_with_items(self, service, make_customer):
        customer = make_customer(is_first_time=True)

        response = service.create_order(_request(customer.id, (2, "19.99"), (1, "5.00")))

        order = current_domain.repository_for(Order).get(response.data.order_id)
        assert order.status == "Pending"
        assert order.customer_id == str(customer.id)
        assert order.item_count == 2
        assert order.total_value == Decimal("44.98")
        assert order.discount_type == "10% discount applied"
        assert order.net_value == Decimal("40.48")

    def test_bulk_boundary(self, service, make_customer):
        customer = make_customer()

        at_threshold = service.create_order(_request(customer.id, (10, "1.00")))
        below_threshold = service.create_order(_request(customer.id, (9, "1.00")))

        assert at_threshold.data.discount_type == "15% discount applied"
        assert below_threshold.data.discount_type is None

    def test_mapping_items_are_accepted(self, service, make_customer):
        customer = make_customer()
        request = CreateOrderRequest(
            customer_id=str(customer.id),
            items=({"product_id": "prod-1", "quantity": 2, "unit_price": "12.50"},),
        )

        response = service.create_order(request)

        assert response.success is True
        assert response.data.total_amount == Decimal("25.00")
        order = current_domain.repository_for(Order).get(response.data.order_id)
        assert order.items[0].product_id == "prod-1"

    def test_largest_accepted_price_is_stored_to_the_cent(self, service, make_customer):
        customer = make_customer()

        response = service.create_order(_request(customer.id, (1, "999999999999.99")))

        assert response.success is True
        order = current_domain.repository_for(Order).get(response.data.order_id)
        assert order.total_value == Decimal("999999999999.99")
        assert order.net_value == Decimal("999999999999.99")

    def test_injected_resolver_is_used(self, make_customer):
        everyone = percentage_rule("Everyone", "0.50", lambda _customer, _items: True)
        service = OrderService(resolver=DiscountResolver([everyone]))
        customer = make_customer()

        response = service.create_order(_request(customer.id, (1, "10.00")))

        assert response.data.discounted_amount == Decimal("5.00")
        assert response.message.endswith("with 50% discount applied")


class TestCreateOrderFailures:
    def test_unknown_customer(self, service):
        response = service.create_order(_request(uuid4(), (1, "10.00")))

        assert response.success is False
        assert response.error == ErrorKind.NOT_FOUND
        assert response.message == "Customer not found!"
        assert _orders() == []

    def test_validation_messages(self, service):
        request = CreateOrderRequest(
            customer_id="",
            items=(
                OrderItemRequest(product_id="", quantity=0, unit_price="0"),
                OrderItemRequest(product_id="prod-1", quantity=1, unit_price="abc"),
            ),
        )

        response = service.create_order(request)

        assert response.error == ErrorKind.VALIDATION_FAILED
        assert list(response.errors) == [
            "Customer id is required",
            "items[0]: Product id is required",
            "items[0]: Quantity must be greater than 0",
            "items[0]: Unit price must be greater than 0",
            "items[1]: Unit price must be a number",
        ]

    def test_empty_item_list(self, service, make_customer):
        customer = make_customer()

        response = service.create_order(CreateOrderRequest(customer_id=str(customer.id), items=()))

        assert response.error == ErrorKind.VALIDATION_FAILED
        assert response.errors == ("Order must contain at least one item",)

    def test_persistence_failure_leaves_no_order(self, service, make_customer):
        customer = make_customer()
        repo = current_domain.repository_for(Order)

        with patch.object(type(repo), "add", side_effect=PersistenceFailure("connection lost")):
            response = service.create_order(_request(customer.id, (1, "10.00")))

        assert response.error == ErrorKind.PERSISTENCE_FAILURE
        assert response.message == PERSISTENCE_FAILURE_MESSAGE
        assert _orders() == []

    def test_cancellation_propagates_without_partial_order(self, service, make_customer):
        import asyncio

        customer = make_customer()
        repo = current_domain.repository_for(Order)

        with patch.object(type(repo), "add", side_effect=asyncio.CancelledError()):
            with pytest.raises(asyncio.CancelledError):
                service.create_order(_request(customer.id, (1, "10.00")))

        assert _orders() == []

    @pytest.mark.parametrize(
        "lines, error",
        [
            (((1, "1000000000000.00"),), f"items[0]: Unit price must be less than {MAX_AMOUNT}"),
            (((1, "98765432109876.43"),), f"items[0]: Unit price must be less than {MAX_AMOUNT}"),
            (((2, "500000000000.00"),), f"Line total must be less than {MAX_AMOUNT}"),
            (((1, "600000000000.00"), (1, "400000000000.00")), f"Order total must be less than {MAX_AMOUNT}"),
        ],
    )
    def test_amounts_too_large_to_store_exactly_are_rejected(self, service, make_customer, lines, error):
        customer = make_customer()

        response = service.create_order(_request(customer.id, *lines))

        assert response.error == ErrorKind.VALIDATION_FAILED
        assert response.errors == (error,)
        assert _orders() == []

    def test_malformed_items_are_reported_not_raised(self, service):
        request = CreateOrderRequest(
            customer_id="cust-001",
            items=({"product_id": "prod-1", "quantity": "two", "unit_price": None}, 42),
        )

        response = service.create_order(request)

        assert response.error == ErrorKind.VALIDATION_FAILED
        assert list(response.errors) == [
            "items[0]: Quantity must be greater than 0",
            "items[0]: Unit price must be a number",
            "items[1]: Product id is required",
            "items[1]: Quantity must be greater than 0",
            "items[1]: Unit price must be a number",
        ]

    def test_items_that_are_not_a_list(self, service):
        response = service.create_order(CreateOrderRequest(customer_id="cust-001", items=7))

        assert response.error == ErrorKind.VALIDATION_FAILED
        assert response.errors == ("items must be a list",)
