"""Order aggregate, the core of the order management domain.

An order is created empty and ``Pending`` for a customer, receives its line
items and its discount exactly once, and afterwards only moves forward through
the status state machine (see ``order_management.order.status``).

Amounts follow the net-payable convention:

    total_amount       Σ quantity × unit_price over all items
    discount_amount    the discount granted
    discounted_amount  total_amount − discount_amount (what the customer pays)
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from order_management.domain import order_management
from order_management.order.status import (
    INITIAL_STATUS,
    OrderStatus,
    can_transition,
    parse_status,
    valid_transitions_from,
)
from order_management.shared.exceptions import InvalidArgument, InvalidOperation, InvalidTransition
from order_management.shared.money import MAX_AMOUNT, ZERO, line_total, money_sum, to_money, within_bounds


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@order_management.entity(part_of="Order")
class OrderItem:
    """A line item: a product, how many of it, and the unit price paid.

    Items are created by the owning Order only and never change afterwards.
    """

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def price(self) -> Decimal:
        return to_money(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        return line_total(self.quantity, self.unit_price)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@order_management.aggregate
class Order:
    customer_id = Identifier(required=True)
    total_amount = Float(default=0.0, min_value=0.0)
    discount_amount = Float(default=0.0, min_value=0.0)
    discounted_amount = Float(default=0.0, min_value=0.0)
    discount_type = String(max_length=100)
    status = String(choices=OrderStatus, default=INITIAL_STATUS.value)
    created_at = DateTime()
    fulfilled_at = DateTime()
    items = HasMany(OrderItem)
    items_added = Boolean(default=False)
    discount_applied = Boolean(default=False)

    @invariant.post
    def discounted_amount_cannot_exceed_total(self):
        if to_money(self.discounted_amount or 0) > to_money(self.total_amount or 0):
            raise ValidationError({"discounted_amount": ["Discounted amount cannot exceed the total amount"]})

    @invariant.post
    def fulfilled_at_set_only_when_delivered(self):
        delivered = self.status == OrderStatus.DELIVERED.value
        if delivered != (self.fulfilled_at is not None):
            raise ValidationError({"fulfilled_at": ["Fulfillment time is set exactly when the order is Delivered"]})

    # -------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        """Start a new, empty ``Pending`` order for ``customer_id``."""
        if customer_id is None or not str(customer_id).strip():
            raise InvalidArgument({"customer_id": ["Customer id is required"]})

        return cls(
            customer_id=str(customer_id),
            status=INITIAL_STATUS.value,
            total_amount=0.0,
            discount_amount=0.0,
            discounted_amount=0.0,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def restore(
        cls,
        order_id,
        customer_id,
        total_amount,
        discounted_amount,
        status,
        created_at,
        fulfilled_at=None,
        items=(),
        discount_type=None,
    ):
        """Rebuild an order from previously persisted values.

        Used for reference data and imports. Every value is validated and the
        aggregate invariants still apply; the only thing skipped is the
        step-by-step lifecycle that produced the values.
        """
        target = parse_status(status)
        if target is None:
            raise InvalidArgument({"status": [f"Unknown order status: {status}"]})
        if customer_id is None or not str(customer_id).strip():
            raise InvalidArgument({"customer_id": ["Customer id is required"]})

        lines = _validated_lines(items)
        total = to_money(total_amount)
        net = to_money(discounted_amount)
        if lines and money_sum(line_total(q, p) for _, q, p in lines) != total:
            raise InvalidArgument({"total_amount": ["Total amount does not match the order items"]})
        if net < ZERO or net > total:
            raise InvalidArgument({"discounted_amount": ["Discounted amount must be between 0 and the total amount"]})

        order = cls(
            id=order_id,
            customer_id=str(customer_id),
            total_amount=float(total),
            discount_amount=float(total - net),
            discounted_amount=float(net),
            discount_type=discount_type,
            status=target.value,
            created_at=created_at,
            fulfilled_at=fulfilled_at,
            items_added=True,
            discount_applied=True,
        )
        for product_id, quantity, price in lines:
            order.add_items(OrderItem(product_id=product_id, quantity=quantity, unit_price=float(price)))
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def total_value(self) -> Decimal:
        return to_money(self.total_amount or 0)

    @property
    def discount_value(self) -> Decimal:
        return to_money(self.discount_amount or 0)

    @property
    def net_value(self) -> Decimal:
        return to_money(self.discounted_amount or 0)

    @property
    def item_count(self) -> int:
        return len(self.items or [])

    @property
    def valid_next_statuses(self) -> list[OrderStatus]:
        return sorted(valid_transitions_from(self.current_status), key=lambda s: list(OrderStatus).index(s))

    # -------------------------------------------------------------------
    # Creation-time operations (one-shot)
    # -------------------------------------------------------------------
    def add_line_items(self, items_data):
        """Add the order's line items and price the order.

        ``items_data`` is an iterable of mappings or objects exposing
        ``product_id``, ``quantity`` and ``unit_price``. All items are
        validated before any is added; an empty iterable prices the order at
        zero. Allowed once per order.
        """
        if self.items_added:
            raise InvalidOperation({"items": ["Items have already been added to this order"]})

        lines = _validated_lines(items_data)
        total = money_sum(line_total(quantity, price) for _, quantity, price in lines)

        with atomic_change(self):
            for product_id, quantity, price in lines:
                self.add_items(OrderItem(product_id=product_id, quantity=quantity, unit_price=float(price)))
            self.total_amount = float(total)
            self.discount_amount = 0.0
            self.discounted_amount = float(total)
            self.items_added = True

    def apply_discount(self, discount_amount, discount_type=None):
        """Grant ``discount_amount`` off the total. Allowed once per order."""
        if self.discount_applied:
            raise InvalidOperation({"discount": ["A discount has already been applied to this order"]})
        if not self.items_added:
            raise InvalidOperation({"discount": ["Items must be added before a discount is applied"]})

        discount = to_money(discount_amount)
        total = self.total_value
        if discount < ZERO:
            raise InvalidArgument({"discount": ["Discount amount cannot be negative"]})
        if discount > total:
            raise InvalidArgument({"discount": ["Discount amount cannot exceed the order total"]})

        with atomic_change(self):
            self.discount_amount = float(discount)
            self.discounted_amount = float(total - discount)
            self.discount_type = discount_type
            self.discount_applied = True

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        """Move the order to ``new_status``.

        Raises ``InvalidTransition`` (state untouched) when the table does not
        allow the move. Entering ``Delivered`` stamps ``fulfilled_at`` once.
        """
        target = parse_status(new_status)
        if target is None:
            raise InvalidArgument({"status": [f"Unknown order status: {new_status}"]})

        current = self.current_status
        if not can_transition(current, target):
            raise InvalidTransition(current, target)

        with atomic_change(self):
            self.status = target.value
            if target == OrderStatus.DELIVERED and self.fulfilled_at is None:
                self.fulfilled_at = datetime.now(UTC)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _field(data, name):
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def _validated_lines(items_data: Iterable) -> list[tuple[str, int, Decimal]]:
    """Normalise raw item inputs to ``(product_id, quantity, unit_price)``.

    Collects every problem across all items before raising. Prices, line
    totals and the order total must stay below ``MAX_AMOUNT``.
    """
    lines = []
    problems = []
    for index, data in enumerate(items_data or ()):
        product_id = _field(data, "product_id")
        quantity = _field(data, "quantity")
        unit_price = _field(data, "unit_price")

        if product_id is None or not str(product_id).strip():
            problems.append(f"items[{index}]: Product id is required")
        quantity_ok = not isinstance(quantity, bool) and isinstance(quantity, int) and quantity >= 0
        if not quantity_ok:
            problems.append(f"items[{index}]: Quantity must be a whole number of at least 0")
        try:
            price = to_money(unit_price)
        except InvalidArgument:
            problems.append(f"items[{index}]: Unit price must be a monetary amount")
            price = None
        else:
            if price < ZERO:
                problems.append(f"items[{index}]: Unit price cannot be negative")
            elif not within_bounds(price):
                problems.append(f"items[{index}]: Unit price must be less than {MAX_AMOUNT}")
            elif quantity_ok and not within_bounds(_bounded_line_total(quantity, price)):
                problems.append(f"items[{index}]: Line total must be less than {MAX_AMOUNT}")

        lines.append((str(product_id) if product_id is not None else "", quantity, price))

    if not problems and not within_bounds(money_sum(line_total(q, p) for _, q, p in lines)):
        problems.append(f"Order total must be less than {MAX_AMOUNT}")
    if problems:
        raise InvalidArgument({"items": problems})
    return lines


def _bounded_line_total(quantity: int, price: Decimal) -> Decimal:
    try:
        return line_total(quantity, price)
    except InvalidArgument:
        return MAX_AMOUNT
