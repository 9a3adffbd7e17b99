"""
Store Inventory - Public API
==============================
Thread-safe catalog store and the replenishment input format.
"""

from store.inventory.replenishment import (
    HEADER_FIELDS,
    ReplenishmentParser,
    ReplenishmentRecord,
    parse_replenishment,
)
from store.inventory.store import InventoryStore

__all__ = [
    "HEADER_FIELDS",
    "InventoryStore",
    "ReplenishmentParser",
    "ReplenishmentRecord",
    "parse_replenishment",
]
