"""Validators for the order use cases.

Each runs before the handler; the messages are returned to the caller as-is.
"""

from collections.abc import Iterable, Mapping

from order_management.order.status import parse_status
from order_management.pipeline.validation import Validator, each, field_value, is_whole_number, required
from order_management.shared.exceptions import InvalidArgument
from order_management.shared.money import MAX_AMOUNT, ZERO, line_total, money_sum, to_money, within_bounds


def _has_items(request):
    if not field_value(request, "items"):
        yield "Order must contain at least one item"


def _positive_quantity(item):
    quantity = field_value(item, "quantity")
    if not is_whole_number(quantity) or quantity <= 0:
        yield "Quantity must be greater than 0"


def _positive_unit_price(item):
    try:
        price = to_money(field_value(item, "unit_price"))
    except InvalidArgument:
        yield "Unit price must be a number"
        return
    if price <= ZERO:
        yield "Unit price must be greater than 0"
    elif not within_bounds(price):
        yield f"Unit price must be less than {MAX_AMOUNT}"


def _priced_lines(items):
    """Line totals of the items whose quantity and price are usable."""
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Iterable):
        return []
    totals = []
    for item in items:
        quantity = field_value(item, "quantity")
        if not is_whole_number(quantity) or quantity <= 0:
            continue
        try:
            price = to_money(field_value(item, "unit_price"))
        except InvalidArgument:
            continue
        if price <= ZERO or not within_bounds(price):
            continue
        try:
            totals.append(line_total(quantity, price))
        except InvalidArgument:
            totals.append(MAX_AMOUNT)
    return totals


def _amounts_within_bounds(request):
    totals = _priced_lines(field_value(request, "items"))
    if any(not within_bounds(total) for total in totals):
        yield f"Line total must be less than {MAX_AMOUNT}"
    elif not within_bounds(money_sum(totals)):
        yield f"Order total must be less than {MAX_AMOUNT}"


def _known_status(request):
    if parse_status(field_value(request, "new_status")) is None:
        yield "Valid order status is required"


def _page_at_least_one(request):
    page = field_value(request, "page")
    if not is_whole_number(page):
        yield "Page must be a whole number"
    elif page < 1:
        yield "Page must be greater than or equal to 1"


def _page_size_within(max_page_size: int):
    def rule(request):
        page_size = field_value(request, "page_size")
        if not is_whole_number(page_size) or not 1 <= page_size <= max_page_size:
            yield f"Page size must be between 1 and {max_page_size}"

    return rule


order_item_validator = Validator(
    required("product_id", "Product id is required"),
    _positive_quantity,
    _positive_unit_price,
)

create_order_validator = Validator(
    required("customer_id", "Customer id is required"),
    _has_items,
    each("items", order_item_validator),
    _amounts_within_bounds,
)

update_order_status_validator = Validator(
    required("order_id", "Order ID is required"),
    _known_status,
)

get_order_validator = Validator(
    required("order_id", "Order ID is required"),
)


def list_orders_validator(max_page_size: int = 100) -> Validator:
    return Validator(_page_at_least_one, _page_size_within(max_page_size))
