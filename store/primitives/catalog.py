"""
Store Catalog Primitive - Product Snapshot
============================================
A CatalogEntry is an immutable snapshot of one product: identity,
prices and quantity on hand. The UPC is the key; two entries may share
a name but never a UPC.

Entries are never mutated. Every change (replenishment, sale debit)
builds a new entry and swaps it into the inventory store.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional, Protocol, TypeVar

from store.errors import InvalidArgumentError
from store.primitives.money import MoneyLike, require_quantity, to_money


# ══════════════════════════════════════════════════════════════
# CATALOG ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CatalogEntry:
    """
    Product snapshot held by the inventory store.

    Fields:
        upc:             Unique product identifier
        name:            Display name (not a key)
        wholesale_price: Cost price, 2 places
        retail_price:    Shelf price charged at the register, 2 places
        quantity:        Quantity on hand (may go negative when oversold)
    """
    upc: str
    name: str
    wholesale_price: Decimal
    retail_price: Decimal
    quantity: int

    def __post_init__(self):
        if not isinstance(self.upc, str) or not self.upc:
            raise InvalidArgumentError("upc must be a non-empty string.")
        if not isinstance(self.name, str):
            raise InvalidArgumentError("name must be a string.")
        object.__setattr__(
            self, "wholesale_price",
            to_money(self.wholesale_price, "wholesale_price"),
        )
        object.__setattr__(
            self, "retail_price",
            to_money(self.retail_price, "retail_price"),
        )
        require_quantity(self.quantity)

    @classmethod
    def of(
        cls,
        upc: str,
        name: str,
        wholesale_price: MoneyLike,
        retail_price: MoneyLike,
        quantity: int,
    ) -> CatalogEntry:
        return cls(
            upc=upc,
            name=name,
            wholesale_price=wholesale_price,
            retail_price=retail_price,
            quantity=quantity,
        )

    def with_quantity(self, quantity: int) -> CatalogEntry:
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        return {
            "upc": self.upc,
            "name": self.name,
            "wholesale_price": str(self.wholesale_price),
            "retail_price": str(self.retail_price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CatalogEntry:
        return cls(
            upc=data["upc"],
            name=data["name"],
            wholesale_price=Decimal(data["wholesale_price"]),
            retail_price=Decimal(data["retail_price"]),
            quantity=data["quantity"],
        )


# ══════════════════════════════════════════════════════════════
# MERGE
# ══════════════════════════════════════════════════════════════

class QuantitySnapshot(Protocol):
    quantity: int


S = TypeVar("S", bound=QuantitySnapshot)


def merge_quantities(old: Optional[S], new: S) -> S:
    """
    Merge an incoming snapshot into an existing one.

    Absent old value: the new snapshot is taken as-is. Otherwise the
    result carries every field of the new snapshot except quantity,
    which is old.quantity + new.quantity. Used for inventory
    replenishment and for line-item aggregation at the register.

    Both arguments must be frozen dataclasses with a quantity field.
    Snapshots that carry a upc must agree on it.
    """
    if new is None:
        raise InvalidArgumentError(
            "The 'new' argument is required; it must not be None."
        )
    if old is None:
        return new
    old_upc = getattr(old, "upc", None)
    new_upc = getattr(new, "upc", None)
    if old_upc != new_upc:
        raise InvalidArgumentError(
            f"Cannot merge snapshots with different upc values: "
            f"old.upc={old_upc}, new.upc={new_upc}."
        )
    return replace(new, quantity=old.quantity + new.quantity)
