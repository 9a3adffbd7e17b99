"""
Store Inventory - Thread-Safe Catalog Store
=============================================
Keyed collection of CatalogEntry snapshots shared by every register.

Concurrency:
- One lock guards the UPC -> CatalogEntry mapping.
- Each replenishment record and each quantity adjustment is a single
  read-merge-write under the lock. No caller ever reads an entry and
  writes it back in separate steps, so concurrent adjustments on the
  same UPC always sum exactly.
- Readers get immutable snapshots; entries are replaced, never mutated.

Lifecycle: created once, then mutated by replenishment and by sale
completion. There is no delete.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Optional, Tuple, Union

from store.errors import InvalidArgumentError
from store.inventory.replenishment import (
    ReplenishmentRecord,
    ReplenishmentSource,
    parse_replenishment,
)
from store.primitives.catalog import CatalogEntry, merge_quantities
from store.primitives.money import require_quantity

logger = logging.getLogger("store.inventory")

Replenishable = Union[ReplenishmentRecord, CatalogEntry]


class InventoryStore:
    """
    Thread-safe in-memory inventory.

    Usage:
        inventory = InventoryStore()
        inventory.replenish_from_csv(open("stock.csv"))
        inventory.find("A123")             # CatalogEntry or None
        inventory.adjust_quantity("A123", -2)
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()):
        self._lock = threading.Lock()
        self._entries: Dict[str, CatalogEntry] = {}
        for entry in entries:
            self._merge(entry)

    # ══════════════════════════════════════════════════════════
    # REPLENISHMENT
    # ══════════════════════════════════════════════════════════

    def replenish(self, records: Iterable[Replenishable]) -> int:
        """
        Merge a batch of records into the inventory.

        New UPCs are inserted. Known UPCs take the incoming name and
        prices and add the incoming quantity to what is on hand.

        Each record is committed as soon as it is merged. If the batch
        raises part way (e.g. a lazily parsed source hits a bad line),
        the records already merged stay committed.

        Returns:
            Number of records merged.

        Raises:
            InvalidArgumentError: records is None or holds a value that
                is neither a ReplenishmentRecord nor a CatalogEntry.
            ReplenishmentParseError: propagated from a lazy source.
        """
        if records is None:
            raise InvalidArgumentError(
                "The 'records' argument is required; it must not be None."
            )
        merged = 0
        for record in records:
            self._merge(self._as_entry(record))
            merged += 1
        logger.info("Replenished %d record(s); %d product(s) in inventory",
                    merged, len(self))
        return merged

    def replenish_from_csv(self, source: ReplenishmentSource) -> int:
        """Parse a replenishment source and merge it record by record."""
        return self.replenish(parse_replenishment(source))

    @staticmethod
    def _as_entry(record: Replenishable) -> CatalogEntry:
        if isinstance(record, CatalogEntry):
            return record
        if isinstance(record, ReplenishmentRecord):
            return record.to_entry()
        raise InvalidArgumentError(
            f"Expected ReplenishmentRecord or CatalogEntry, "
            f"got {type(record).__name__}."
        )

    def _merge(self, incoming: CatalogEntry) -> CatalogEntry:
        with self._lock:
            merged = merge_quantities(self._entries.get(incoming.upc), incoming)
            self._entries[incoming.upc] = merged
        logger.debug("Merged %s: quantity=%d", merged.upc, merged.quantity)
        return merged

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def list(self) -> Tuple[CatalogEntry, ...]:
        """Point-in-time snapshot of every entry, in insertion order."""
        with self._lock:
            return tuple(self._entries.values())

    def find(self, upc: str) -> Optional[CatalogEntry]:
        with self._lock:
            return self._entries.get(upc)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, upc: object) -> bool:
        with self._lock:
            return upc in self._entries

    # ══════════════════════════════════════════════════════════
    # ADJUSTMENT
    # ══════════════════════════════════════════════════════════

    def adjust_quantity(self, upc: str, delta: int) -> Optional[CatalogEntry]:
        """
        Atomically add delta to the quantity on hand for upc.

        Returns the updated entry, or None when upc is unknown (no-op).
        """
        require_quantity(delta, "delta")
        with self._lock:
            current = self._entries.get(upc)
            if current is None:
                updated = None
            else:
                updated = current.with_quantity(current.quantity + delta)
                self._entries[upc] = updated

        if updated is None:
            logger.debug("Adjustment of %+d ignored: %s not in inventory",
                         delta, upc)
        elif updated.quantity <= 0:
            logger.warning("%s (%s) is out of stock: quantity=%d",
                           updated.upc, updated.name, updated.quantity)
        else:
            logger.debug("Adjusted %s by %+d: quantity=%d",
                         upc, delta, updated.quantity)
        return updated
