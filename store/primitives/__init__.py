"""
Store Primitives
================
Value objects shared by every store subsystem.

    money    - two-place Decimal amounts and quantity checks
    catalog  - CatalogEntry product snapshot and the shared merge
"""

from store.primitives.catalog import CatalogEntry, merge_quantities
from store.primitives.money import (
    MONEY_QUANT,
    ZERO_MONEY,
    extended_price,
    require_quantity,
    to_decimal,
    to_money,
)

__all__ = [
    "CatalogEntry",
    "merge_quantities",
    "MONEY_QUANT",
    "ZERO_MONEY",
    "extended_price",
    "require_quantity",
    "to_decimal",
    "to_money",
]
