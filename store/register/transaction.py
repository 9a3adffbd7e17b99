"""
Store Transaction - Per-Sale State Machine
============================================
Lifecycle: STARTED -> PAID. PAID is terminal.

While STARTED the transaction accumulates line items keyed by UPC
(scan order preserved). Totals are computed on demand. pay() freezes
total, count, paid and change and moves the transaction to PAID; after
that every mutating call fails with InvalidStateError and the line
items are exposed read-only for reporting.

A transaction is owned by one register and is not thread-safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from store.errors import (
    InsufficientFundsError,
    InvalidArgumentError,
    InvalidStateError,
)
from store.primitives.catalog import CatalogEntry, merge_quantities
from store.primitives.money import (
    ZERO_MONEY,
    MoneyLike,
    extended_price,
    require_quantity,
    to_decimal,
    to_money,
)


class TransactionState(Enum):
    STARTED = "STARTED"
    PAID = "PAID"


# ══════════════════════════════════════════════════════════════
# LINE ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LineItem:
    """
    Accumulated quantity of one product in a transaction.

    name and unit_price are snapshotted from the catalog at scan time;
    later price changes in inventory do not reach this line.
    """
    name: str
    unit_price: Decimal
    quantity: int

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise InvalidArgumentError("name must be a string.")
        object.__setattr__(
            self, "unit_price", to_money(self.unit_price, "unit_price"),
        )
        require_quantity(self.quantity)
        if self.quantity < 1:
            raise InvalidArgumentError(
                f"quantity must be positive, got {self.quantity}."
            )

    @property
    def extended_price(self) -> Decimal:
        return extended_price(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "extended_price": str(self.extended_price),
        }


# ══════════════════════════════════════════════════════════════
# TRANSACTION
# ══════════════════════════════════════════════════════════════

class Transaction:
    """One sale: line items keyed by UPC, payment, frozen totals."""

    def __init__(self):
        self._state = TransactionState.STARTED
        self._line_items: Dict[str, LineItem] = {}
        # frozen at payment
        self._count: Optional[int] = None
        self._total: Optional[Decimal] = None
        self._paid: Optional[Decimal] = None
        self._change: Optional[Decimal] = None

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_paid(self) -> bool:
        return self._state is TransactionState.PAID

    @property
    def line_items(self) -> Mapping[str, LineItem]:
        """Read-only view of line items keyed by UPC, in scan order."""
        return MappingProxyType(dict(self._line_items))

    def _require_started(self, action: str) -> None:
        if self._state is not TransactionState.STARTED:
            raise InvalidStateError(
                f"Cannot {action}: transaction is {self._state.value}."
            )

    # ── mutation ──────────────────────────────────────────────

    def add(self, product: CatalogEntry, quantity: int = 1) -> bool:
        """
        Add quantity of product to the transaction.

        The line item for product.upc takes the product's current name
        and retail price; quantities accumulate across calls.

        Returns:
            False if the accumulated quantity now exceeds the product's
            quantity on hand at scan time, True otherwise. The item is
            added either way: goods in the customer's hand are sold even
            when recorded stock says otherwise.

        Raises:
            InvalidStateError: transaction already paid.
            InvalidArgumentError: product is None, or quantity is not a
                positive int.
        """
        self._require_started("add a product to a paid transaction")
        if product is None:
            raise InvalidArgumentError(
                "The 'product' argument is required; it must not be None."
            )
        require_quantity(quantity)
        if quantity <= 0:
            raise InvalidArgumentError(
                f"quantity must be positive, got {quantity}."
            )

        line_item = merge_quantities(
            self._line_items.get(product.upc),
            LineItem(
                name=product.name,
                unit_price=product.retail_price,
                quantity=quantity,
            ),
        )
        self._line_items[product.upc] = line_item
        return line_item.quantity <= product.quantity

    def pay(self, amount_tendered: MoneyLike) -> Decimal:
        """
        Pay the transaction and close it.

        Returns:
            Change due, amount_tendered - total.

        Raises:
            InvalidStateError: transaction already paid.
            InvalidArgumentError: amount_tendered is None or not numeric.
            InsufficientFundsError: amount_tendered < total. The
                transaction stays STARTED so payment can be retried.
        """
        self._require_started("pay for a transaction that has already been paid")
        if amount_tendered is None:
            raise InvalidArgumentError(
                "The 'amount_tendered' argument is required; it must not be None."
            )
        # compare unrounded; 2.745 tendered against 2.75 is short
        tendered = to_decimal(amount_tendered, "amount_tendered")
        total = self._compute_total()
        if tendered < total:
            raise InsufficientFundsError(tendered=tendered, total=total)
        paid = to_money(tendered, "amount_tendered")

        self._total = total
        self._count = self._compute_count()
        self._paid = paid
        self._change = paid - total
        self._state = TransactionState.PAID
        return self._change

    # ── totals ────────────────────────────────────────────────

    def _compute_total(self) -> Decimal:
        return to_money(
            sum((item.extended_price for item in self._line_items.values()),
                ZERO_MONEY)
        )

    def _compute_count(self) -> int:
        return sum(item.quantity for item in self._line_items.values())

    def get_total(self) -> Decimal:
        if self.is_paid:
            return self._total
        return self._compute_total()

    def get_count(self) -> int:
        if self.is_paid:
            return self._count
        return self._compute_count()

    def get_paid(self) -> Decimal:
        return self._paid if self.is_paid else ZERO_MONEY

    def get_change(self) -> Decimal:
        return self._change if self.is_paid else ZERO_MONEY

    def __repr__(self) -> str:
        return (
            f"Transaction(state={self._state.value}, "
            f"lines={len(self._line_items)}, total={self.get_total()})"
        )
