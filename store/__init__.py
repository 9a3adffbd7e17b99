"""
Store - Point-of-Sale Core
============================
An inventory of priced products and a cash register that sells from it.

    inventory  - thread-safe InventoryStore and replenishment input
    register   - Transaction state machine and CashRegister
    receipt    - text receipts for paid transactions
    primitives - money amounts and CatalogEntry snapshots

Usage:
    inventory = InventoryStore()
    inventory.replenish_from_csv(open("stock.csv"))

    register = CashRegister(inventory)
    register.begin_transaction()
    register.scan("A123")
    change = register.pay("5.00")
    print(register.print_receipt())
"""

from store.config import StoreSettings
from store.errors import (
    InsufficientFundsError,
    InvalidArgumentError,
    InvalidStateError,
    ReplenishmentParseError,
    StoreError,
)
from store.inventory import (
    InventoryStore,
    ReplenishmentParser,
    ReplenishmentRecord,
    parse_replenishment,
)
from store.primitives import CatalogEntry, merge_quantities, to_money
from store.receipt import ReceiptFormatter
from store.register import CashRegister, LineItem, Transaction, TransactionState

__all__ = [
    "CashRegister",
    "CatalogEntry",
    "InsufficientFundsError",
    "InvalidArgumentError",
    "InvalidStateError",
    "InventoryStore",
    "LineItem",
    "ReceiptFormatter",
    "ReplenishmentParseError",
    "ReplenishmentParser",
    "ReplenishmentRecord",
    "StoreError",
    "StoreSettings",
    "Transaction",
    "TransactionState",
    "merge_quantities",
    "parse_replenishment",
    "to_money",
]
