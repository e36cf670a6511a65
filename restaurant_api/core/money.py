# restaurant_api/core/money.py
#
# Prices and totals are decimal.Decimal end to end, stored as Numeric(10, 2).
# Floats are rejected so binary rounding never reaches a total.

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest amount a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value) -> Decimal:
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Money cannot be built from {type(value).__name__}")

    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid money amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid money amount: {value!r}")

    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(price, quantity: int) -> Decimal:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise TypeError("Quantity must be an integer")
    return to_money(to_money(price) * quantity)


def add(*amounts) -> Decimal:
    total = ZERO
    for amount in amounts:
        total += to_money(amount)
    return total
