"""Order use cases, each wrapped in the request pipeline.

``OrderService`` is the single entry point for adapters. Every public
attribute is a pipeline: call it with a request object, get a ``Response``.
Handlers run against ``current_domain``, so callers need an active domain
context.
"""

import json

import structlog
from protean.utils.globals import current_domain

from order_management.analytics.cache import MemoryCache
from order_management.analytics.service import AnalyticsService
from order_management.config import Settings
from order_management.customer.customer import Customer
from order_management.customer.repository import CustomerRepository
from order_management.discount.resolver import DiscountResolver
from order_management.discount.rules import default_rules
from order_management.order.creation import CreateOrder
from order_management.order.order import Order
from order_management.order.repository import OrderRepository
from order_management.order.requests import (
    CreateOrderRequest,
    GetAnalyticsRequest,
    GetOrderRequest,
    ListOrdersRequest,
    OrderItemRequest,
    UpdateOrderStatusRequest,
)
from order_management.order.status import parse_status
from order_management.order.status_update import UpdateOrderStatus
from order_management.order.validators import (
    create_order_validator,
    get_order_validator,
    list_orders_validator,
    update_order_status_validator,
)
from order_management.order.views import OrderDetail, OrderPage, PlacedOrder, StatusChange
from order_management.pipeline.response import Response
from order_management.pipeline.stages import build_pipeline
from order_management.pipeline.validation import field_value
from order_management.shared.money import to_money

logger = structlog.get_logger(__name__)


class OrderService:
    def __init__(
        self,
        resolver: DiscountResolver | None = None,
        analytics: AnalyticsService | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.resolver = resolver or DiscountResolver(default_rules(self.settings.bulk_order_threshold))
        self.analytics = analytics or AnalyticsService(
            MemoryCache(), ttl_seconds=self.settings.analytics_cache_ttl_seconds
        )

        self.create_order = build_pipeline(self._create_order, create_order_validator, "CreateOrderRequest")
        self.update_order_status = build_pipeline(
            self._update_order_status, update_order_status_validator, "UpdateOrderStatusRequest"
        )
        self.get_order = build_pipeline(self._get_order, get_order_validator, "GetOrderRequest")
        self.list_orders = build_pipeline(
            self._list_orders, list_orders_validator(self.settings.max_page_size), "ListOrdersRequest"
        )
        self.get_analytics = build_pipeline(self._get_analytics, request_type="GetAnalyticsRequest")

    @staticmethod
    def _customers() -> CustomerRepository:
        return current_domain.repository_for(Customer)

    @staticmethod
    def _orders() -> OrderRepository:
        return current_domain.repository_for(Order)

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def _create_order(self, request: CreateOrderRequest) -> Response:
        customer = self._customers().find_by_id(request.customer_id)
        if customer is None:
            logger.warning("Customer not found", customer_id=request.customer_id)
            return Response.not_found("Customer not found!")

        lines = [
            OrderItemRequest(
                product_id=str(field_value(item, "product_id")),
                quantity=field_value(item, "quantity"),
                unit_price=to_money(field_value(item, "unit_price")),
            )
            for item in request.items
        ]
        discount = self.resolver.calculate_best_discount(customer, lines)
        items = [
            {"product_id": line.product_id, "quantity": line.quantity, "unit_price": str(line.unit_price)}
            for line in lines
        ]
        order_id = current_domain.process(
            CreateOrder(
                customer_id=str(customer.id),
                items=json.dumps(items),
                discount_amount=float(discount.amount),
                discount_type=discount.discount_type,
            ),
            asynchronous=False,
        )

        order = self._orders().get(order_id)
        logger.info(
            "Order created",
            order_id=order_id,
            customer_id=str(customer.id),
            total_amount=str(order.total_value),
            discount=discount.rule_name,
        )

        message = f"Order created successfully with ID: {order_id}"
        if discount.applied:
            message += f" with {discount.discount_type}"
        placed = PlacedOrder(
            order_id=order_id,
            total_amount=order.total_value,
            discount_amount=order.discount_value,
            discounted_amount=order.net_value,
            discount_type=order.discount_type,
        )
        return Response.ok(placed, message)

    def _update_order_status(self, request: UpdateOrderStatusRequest) -> Response:
        if self._orders().find_by_id(request.order_id) is None:
            logger.warning("Order not found", order_id=request.order_id)
            return Response.not_found("Order not found!")

        target = parse_status(request.new_status)
        current_domain.process(
            UpdateOrderStatus(order_id=str(request.order_id), new_status=target.value),
            asynchronous=False,
        )

        logger.info("Order status updated", order_id=request.order_id, new_status=target.value)
        return Response.ok(
            StatusChange(order_id=str(request.order_id), new_status=target.value),
            f"Order status successfully updated to {target.value}",
        )

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def _get_order(self, request: GetOrderRequest) -> Response:
        order = self._orders().find_by_id(request.order_id)
        if order is None:
            logger.warning("Order not found", order_id=request.order_id)
            return Response.not_found("Order not found")

        return Response.ok(OrderDetail.from_order(order), "Order retrieved successfully")

    def _list_orders(self, request: ListOrdersRequest) -> Response:
        # Unrecognised filters fall back to the unfiltered listing
        status = parse_status(request.status) if request.status else None
        orders, total = self._orders().query_orders(
            status=status,
            offset=(request.page - 1) * request.page_size,
            limit=request.page_size,
        )

        page = OrderPage.build(orders, total, request.page, request.page_size)
        logger.info(
            "Orders retrieved",
            count=len(page.orders),
            page=page.page,
            total_pages=page.total_pages,
        )
        return Response.ok(page, "Orders retrieved successfully")

    def _get_analytics(self, request: GetAnalyticsRequest) -> Response:
        snapshot, cached = self.analytics.get_snapshot()
        if cached:
            return Response.ok(snapshot, "Order analytics retrieved from cache")
        return Response.ok(snapshot, "Order analytics retrieved successfully")
