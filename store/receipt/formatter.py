"""
Store Receipt - Fixed-Width Text Rendering
============================================
Renders a paid transaction's frozen totals:

    BridgePhase Convenience Store
    -----------------------------
    Total Products Bought: 3

    2 Apple @ $1.00: $2.00
    1 Peach @ $0.75: $0.75
    -----------------------------
    Total: $2.75
    Paid: $3.00
    Change: $0.25
    -----------------------------

Money is rendered with babel for the configured currency and locale.
The formatter only reads; it never mutates the transaction.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, TextIO

from babel.core import Locale, UnknownLocaleError
from babel.numbers import format_currency

from store.config import StoreSettings
from store.errors import InvalidArgumentError, InvalidStateError

if TYPE_CHECKING:
    from store.register.transaction import Transaction

RULE = "-" * 29


class ReceiptFormatter:
    """Renders paid transactions as fixed-width text receipts."""

    def __init__(self, settings: Optional[StoreSettings] = None):
        self._settings = settings or StoreSettings()
        try:
            self._locale = Locale.parse(self._settings.locale)
        except (UnknownLocaleError, ValueError) as exc:
            raise InvalidArgumentError(
                f"Unknown locale '{self._settings.locale}': {exc}"
            ) from exc

    @property
    def settings(self) -> StoreSettings:
        return self._settings

    def money(self, amount: Decimal) -> str:
        return format_currency(
            amount, self._settings.currency, locale=self._locale,
        )

    def lines(self, transaction: Transaction) -> List[str]:
        if transaction is None:
            raise InvalidArgumentError(
                "The 'transaction' argument is required; it must not be None."
            )
        if not transaction.is_paid:
            raise InvalidStateError(
                "Cannot print a receipt for an unpaid transaction."
            )

        out = [
            self._settings.store_name,
            RULE,
            f"Total Products Bought: {transaction.get_count()}",
            "",
        ]
        for item in transaction.line_items.values():
            out.append(
                f"{item.quantity} {item.name} @ {self.money(item.unit_price)}: "
                f"{self.money(item.extended_price)}"
            )
        out.extend([
            RULE,
            f"Total: {self.money(transaction.get_total())}",
            f"Paid: {self.money(transaction.get_paid())}",
            f"Change: {self.money(transaction.get_change())}",
            RULE,
        ])
        return out

    def format(self, transaction: Transaction) -> str:
        return "".join(f"{line}\n" for line in self.lines(transaction))

    def print(self, transaction: Transaction, out: TextIO) -> str:
        """Write the receipt to out without closing it; return the text."""
        if out is None:
            raise InvalidArgumentError(
                "The 'out' argument is required; it must not be None."
            )
        text = self.format(transaction)
        out.write(text)
        out.flush()
        return text
