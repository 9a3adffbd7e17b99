"""
Store Money Primitive - Fixed-Scale Decimal Amounts
=====================================================
Every monetary value in the store is a Decimal with exactly two
fractional digits, rounded half-up. Quantities are plain ints.

RULES:
- No binary floats in arithmetic. Floats are accepted at the edge and
  converted through str() so 0.1 stays 0.10.
- Every amount leaving to_money() is quantized to MONEY_QUANT.
- to_decimal() keeps full precision for comparisons that must not be
  rounded first (tendered amount vs total).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from store.errors import InvalidArgumentError

MONEY_QUANT = Decimal("0.01")
MONEY_ROUNDING = ROUND_HALF_UP
ZERO_MONEY = Decimal("0.00")

MoneyLike = Union[Decimal, int, str, float]


def to_decimal(value: MoneyLike, name: str = "amount") -> Decimal:
    """
    Coerce a value to a finite Decimal without rounding.

    Raises:
        InvalidArgumentError: value is None, a bool, not numeric, or
            not finite.
    """
    if value is None:
        raise InvalidArgumentError(
            f"The '{name}' argument is required; it must not be None."
        )
    if isinstance(value, bool):
        raise InvalidArgumentError(f"'{name}' must be a number, got bool.")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidArgumentError(
                f"'{name}' is not a valid decimal amount: {value!r}."
            ) from None
    else:
        raise InvalidArgumentError(
            f"'{name}' must be Decimal, int, str or float, "
            f"got {type(value).__name__}."
        )

    if not amount.is_finite():
        raise InvalidArgumentError(f"'{name}' must be finite, got {value!r}.")
    return amount


def _quantize(amount: Decimal, name: str) -> Decimal:
    try:
        return amount.quantize(MONEY_QUANT, rounding=MONEY_ROUNDING)
    except InvalidOperation:
        raise InvalidArgumentError(
            f"'{name}' is too large to carry two fractional digits: {amount}."
        ) from None


def to_money(value: MoneyLike, name: str = "amount") -> Decimal:
    """
    Coerce a value to a two-place Decimal.

    Raises:
        InvalidArgumentError: as to_decimal(), or the amount is too large
            to quantize within the decimal context precision.
    """
    return _quantize(to_decimal(value, name), name)


def extended_price(unit_price: Decimal, quantity: int) -> Decimal:
    """unit_price x quantity at money scale."""
    return _quantize(unit_price * quantity, "extended_price")


def require_quantity(value: int, name: str = "quantity") -> int:
    if value is None:
        raise InvalidArgumentError(
            f"The '{name}' argument is required; it must not be None."
        )
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"'{name}' must be int, got {type(value).__name__}."
        )
    return value
