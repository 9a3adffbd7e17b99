"""
Checkout runner: load an inventory file, ring up a sale, print the receipt.

Usage:
    store-checkout --inventory stock.csv --pay 5.00 A123 A123 B234
    python -m store.cli --inventory stock.csv --pay 5.00 A123 --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from store.config import StoreSettings
from store.errors import StoreError
from store.inventory.store import InventoryStore
from store.receipt.formatter import ReceiptFormatter
from store.register.cash_register import CashRegister

logger = logging.getLogger("store.cli")


def run(
    *,
    inventory_path: str,
    upcs: Sequence[str],
    amount_tendered: str,
    settings: Optional[StoreSettings] = None,
) -> str:
    inventory = InventoryStore()
    # binary, so undecodable bytes are reported with their line number
    with open(inventory_path, "rb") as source:
        inventory.replenish_from_csv(source)

    register = CashRegister(
        inventory, receipt_formatter=ReceiptFormatter(settings),
    )
    register.begin_transaction()
    for upc in upcs:
        if not register.scan(upc):
            logger.warning("Scan of %s needs attention (unknown or low stock)", upc)
    register.pay(amount_tendered)
    return register.print_receipt()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="store-checkout")
    parser.add_argument("--inventory", required=True,
                        help="Replenishment CSV used to seed the inventory")
    parser.add_argument("--pay", required=True, help="Amount tendered")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("upcs", nargs="*", help="UPCs to scan, in order")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        receipt = run(
            inventory_path=args.inventory,
            upcs=args.upcs,
            amount_tendered=args.pay,
            settings=StoreSettings.from_env(),
        )
    except (StoreError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(receipt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
