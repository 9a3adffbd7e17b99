"""Receipt rendering for paid transactions."""

from store.receipt.formatter import RULE, ReceiptFormatter

__all__ = ["RULE", "ReceiptFormatter"]
