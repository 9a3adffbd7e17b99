"""
Store Register - Public API
=============================
Transaction state machine and the cash register that drives it.
"""

from store.register.transaction import LineItem, Transaction, TransactionState
from store.register.cash_register import CashRegister

__all__ = [
    "CashRegister",
    "LineItem",
    "Transaction",
    "TransactionState",
]
