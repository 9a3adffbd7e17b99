"""
Store Errors
============
Error taxonomy shared by the inventory, register and receipt layers.

- InvalidStateError:       operation attempted in the wrong lifecycle phase
- InvalidArgumentError:    a required argument is missing or malformed
- InsufficientFundsError:  tendered amount does not cover the total
- ReplenishmentParseError: malformed replenishment input

None of these are retried by the library. All propagate to the caller.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional


class StoreError(Exception):
    """Base error for all store operations."""
    pass


class InvalidStateError(StoreError):
    """Transaction or register is in the wrong state for the operation."""
    pass


class InvalidArgumentError(StoreError, ValueError):
    """A required argument is absent or has the wrong shape."""
    pass


class InsufficientFundsError(StoreError):
    """
    Tendered amount is less than the transaction total.

    Not an InvalidArgumentError: the caller is expected to ask for more
    money and call pay() again, the transaction stays open.
    """

    def __init__(self, tendered: Decimal, total: Decimal):
        self.tendered = tendered
        self.total = total
        self.shortfall = total - tendered
        super().__init__(
            f"The amount of {tendered} is insufficient to cover "
            f"the total transaction cost of {total}."
        )


class ReplenishmentParseError(StoreError, ValueError):
    """A replenishment line could not be parsed."""

    def __init__(
        self,
        message: str,
        *,
        line_number: int,
        field: Optional[str] = None,
        line: Optional[str] = None,
    ):
        self.line_number = line_number
        self.field = field
        self.line = line
        location = f"line {line_number}"
        if field is not None:
            location += f", field '{field}'"
        super().__init__(f"{message} ({location})")
