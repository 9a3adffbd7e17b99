"""
Store Cash Register - Sale Lifecycle
======================================
Drives one transaction at a time against a shared inventory store:

    begin_transaction() -> scan(upc)* -> pay(amount) -> print_receipt()

The register translates UPC lookups into transaction mutations and,
once payment succeeds, debits the inventory for every line item.

A register and its transaction belong to a single caller and carry no
locking. Only the inventory store is shared between registers.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, TextIO

from store.errors import InvalidArgumentError, InvalidStateError
from store.inventory.store import InventoryStore
from store.primitives.money import MoneyLike
from store.receipt.formatter import ReceiptFormatter
from store.register.transaction import Transaction

logger = logging.getLogger("store.register")


class CashRegister:
    """
    One register, one sale at a time, selling from a shared inventory.

    Usage:
        register = CashRegister(inventory)
        register.begin_transaction()
        register.scan("A123")
        change = register.pay("5.00")
        print(register.print_receipt())
    """

    def __init__(
        self,
        inventory: InventoryStore,
        *,
        receipt_formatter: Optional[ReceiptFormatter] = None,
    ):
        if inventory is None:
            raise InvalidArgumentError(
                "The 'inventory' argument is required; it must not be None."
            )
        self._inventory = inventory
        self._receipt_formatter = receipt_formatter or ReceiptFormatter()
        self._transaction: Optional[Transaction] = None

    @property
    def inventory(self) -> InventoryStore:
        return self._inventory

    @property
    def transaction(self) -> Optional[Transaction]:
        return self._transaction

    def _require_transaction(self, message: str) -> Transaction:
        if self._transaction is None:
            raise InvalidStateError(message)
        return self._transaction

    # ══════════════════════════════════════════════════════════
    # LIFECYCLE
    # ══════════════════════════════════════════════════════════

    def begin_transaction(self) -> Transaction:
        """
        Open a new transaction.

        A previous PAID transaction is dropped; it is not archived.

        Raises:
            InvalidStateError: the current transaction is still open.
        """
        if self._transaction is not None and not self._transaction.is_paid:
            raise InvalidStateError("Transaction has already been started.")
        self._transaction = Transaction()
        logger.debug("Transaction started")
        return self._transaction

    def scan(self, upc: str) -> bool:
        """
        Add one unit of upc to the open transaction.

        Returns False for an unknown UPC (transaction unchanged) or when
        the scan pushes the line quantity past the stock on hand; the
        item is still added in the latter case.

        Raises:
            InvalidStateError: no transaction has been started, or the
                transaction is already paid.
            InvalidArgumentError: upc is None.
        """
        transaction = self._require_transaction(
            "Transaction has not been started; start transaction "
            "before scanning products."
        )
        if transaction.is_paid:
            raise InvalidStateError(
                "Transaction has already been paid; begin a new "
                "transaction before scanning products."
            )
        if upc is None:
            raise InvalidArgumentError(
                "The 'upc' argument is required; it must not be None."
            )
        product = self._inventory.find(upc)
        if product is None:
            logger.info("Scanned unknown upc %s", upc)
            return False
        in_stock = transaction.add(product, 1)
        if not in_stock:
            logger.info("Scanned %s beyond recorded stock of %d",
                        upc, product.quantity)
        return in_stock

    def get_total(self) -> Decimal:
        return self._require_transaction(
            "Transaction has not been started."
        ).get_total()

    def pay(self, amount_tendered: MoneyLike) -> Decimal:
        """
        Pay the open transaction and debit inventory.

        Inventory is debited only after payment succeeds. A product that
        has left the inventory since it was scanned is skipped: the sale
        stands and nothing is rolled back.

        Returns:
            Change due.

        Raises:
            InvalidStateError: no transaction, or already paid.
            InvalidArgumentError: amount_tendered is None.
            InsufficientFundsError: amount_tendered is below the total.
        """
        transaction = self._require_transaction(
            "Transaction has not been started; cannot pay for a "
            "transaction that has not been started."
        )
        change = transaction.pay(amount_tendered)
        logger.info(
            "Sale completed: count=%d total=%s paid=%s change=%s",
            transaction.get_count(), transaction.get_total(),
            transaction.get_paid(), change,
        )
        self._debit_inventory(transaction)
        return change

    def _debit_inventory(self, transaction: Transaction) -> None:
        for upc, line_item in transaction.line_items.items():
            updated = self._inventory.adjust_quantity(upc, -line_item.quantity)
            if updated is None:
                logger.warning(
                    "Sold %d of %s but it is no longer in inventory",
                    line_item.quantity, upc,
                )

    # ══════════════════════════════════════════════════════════
    # RECEIPT
    # ══════════════════════════════════════════════════════════

    def print_receipt(self, out: Optional[TextIO] = None) -> str:
        """
        Render the paid transaction's receipt.

        Writes to out when given. Returns the receipt text.

        Raises:
            InvalidStateError: no transaction, or it is not paid.
        """
        transaction = self._require_transaction(
            "Transaction has not been started; no receipt to print."
        )
        if out is None:
            return self._receipt_formatter.format(transaction)
        return self._receipt_formatter.print(transaction, out)
