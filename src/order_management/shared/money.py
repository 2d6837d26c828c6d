"""Fixed-precision money arithmetic.

Amounts are ``Decimal`` values quantized to cents with ``ROUND_HALF_UP``.
Protean has no decimal field, so aggregates persist amounts in ``Float``
fields. A float holds fifteen significant digits exactly, so amounts are only
accepted below ``MAX_AMOUNT``; below that bound a stored value reads back to
the same cents.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from order_management.shared.exceptions import InvalidArgument

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("1000000000000")


def _quantize(amount: Decimal, value) -> Decimal:
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidArgument({"amount": [f"Amount out of range: {value!r}"]}) from exc


def to_money(value) -> Decimal:
    """Convert ``value`` to a cent-quantized ``Decimal``."""
    if isinstance(value, bool) or value is None:
        raise InvalidArgument({"amount": [f"Not a monetary amount: {value!r}"]})
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidArgument({"amount": [f"Not a monetary amount: {value!r}"]}) from exc
    if not amount.is_finite():
        raise InvalidArgument({"amount": [f"Not a monetary amount: {value!r}"]})
    return _quantize(amount, value)


def line_total(quantity: int, unit_price) -> Decimal:
    """``quantity × unit_price``, quantized."""
    return _quantize(Decimal(quantity) * to_money(unit_price), unit_price)


def money_sum(values: Iterable) -> Decimal:
    total = ZERO
    for value in values:
        total += to_money(value)
    return total


def percentage_of(amount, rate) -> Decimal:
    """Apply a fractional ``rate`` (``Decimal("0.15")`` for 15%) to ``amount``."""
    return (to_money(amount) * Decimal(str(rate))).quantize(CENT, rounding=ROUND_HALF_UP)


def within_bounds(amount: Decimal) -> bool:
    """True when ``amount`` is below ``MAX_AMOUNT`` and so stores exactly."""
    return amount < MAX_AMOUNT
