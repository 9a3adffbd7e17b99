"""
Store Primitives Test Suite
=============================
Tests for: money coercion, CatalogEntry snapshots, the shared merge.
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from store.errors import InvalidArgumentError
from store.primitives.catalog import CatalogEntry, merge_quantities
from store.primitives.money import (
    ZERO_MONEY,
    extended_price,
    require_quantity,
    to_money,
)
from store.register.transaction import LineItem


# ══════════════════════════════════════════════════════════════
# MONEY
# ══════════════════════════════════════════════════════════════

class TestToMoney:
    def test_int_gets_two_places(self):
        assert str(to_money(1)) == "1.00"

    def test_string_amount(self):
        assert to_money("3.5") == Decimal("3.50")

    def test_float_goes_through_str(self):
        assert str(to_money(0.1)) == "0.10"

    def test_rounds_half_up(self):
        assert to_money(Decimal("0.125")) == Decimal("0.13")
        assert to_money(Decimal("2.675")) == Decimal("2.68")
        assert to_money(Decimal("0.124")) == Decimal("0.12")

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError, match="required"):
            to_money(None)

    def test_bool_rejected(self):
        with pytest.raises(InvalidArgumentError, match="bool"):
            to_money(True)

    def test_garbage_rejected(self):
        with pytest.raises(InvalidArgumentError, match="not a valid decimal"):
            to_money("1.0.0")

    def test_nan_rejected(self):
        with pytest.raises(InvalidArgumentError, match="finite"):
            to_money("NaN")

    def test_unsupported_type_rejected(self):
        with pytest.raises(InvalidArgumentError, match="list"):
            to_money([1])

    def test_zero_money_scale(self):
        assert str(ZERO_MONEY) == "0.00"


class TestExtendedPrice:
    def test_price_times_quantity(self):
        assert extended_price(Decimal("0.75"), 3) == Decimal("2.25")

    def test_keeps_money_scale(self):
        assert str(extended_price(Decimal("1.00"), 2)) == "2.00"


class TestRequireQuantity:
    def test_accepts_int(self):
        assert require_quantity(-4) == -4

    def test_rejects_str(self):
        with pytest.raises(InvalidArgumentError, match="int"):
            require_quantity("4")

    def test_rejects_bool(self):
        with pytest.raises(InvalidArgumentError):
            require_quantity(True)


# ══════════════════════════════════════════════════════════════
# CATALOG ENTRY
# ══════════════════════════════════════════════════════════════

class TestCatalogEntry:
    def test_prices_are_quantized(self):
        entry = CatalogEntry.of("A123", "Apple", 0.5, 1, 100)
        assert str(entry.wholesale_price) == "0.50"
        assert str(entry.retail_price) == "1.00"
        assert entry.quantity == 100

    def test_half_up_at_construction(self):
        entry = CatalogEntry.of("A123", "Apple", "0.505", "1.005", 1)
        assert entry.wholesale_price == Decimal("0.51")
        assert entry.retail_price == Decimal("1.01")

    def test_immutable(self):
        entry = CatalogEntry.of("A123", "Apple", "0.50", "1.00", 100)
        with pytest.raises(FrozenInstanceError):
            entry.quantity = 5

    def test_empty_upc_rejected(self):
        with pytest.raises(InvalidArgumentError, match="upc"):
            CatalogEntry.of("", "Apple", "0.50", "1.00", 1)

    def test_none_price_rejected(self):
        with pytest.raises(InvalidArgumentError, match="retail_price"):
            CatalogEntry.of("A123", "Apple", "0.50", None, 1)

    def test_quantity_must_be_int(self):
        with pytest.raises(InvalidArgumentError, match="quantity"):
            CatalogEntry.of("A123", "Apple", "0.50", "1.00", "1")

    def test_with_quantity_copies(self):
        entry = CatalogEntry.of("A123", "Apple", "0.50", "1.00", 100)
        changed = entry.with_quantity(98)
        assert changed.quantity == 98
        assert entry.quantity == 100
        assert changed.retail_price == entry.retail_price

    def test_serialization(self):
        entry = CatalogEntry.of("C123", "Milk", "2.15", "4.50", 40)
        data = entry.to_dict()
        assert data["retail_price"] == "4.50"
        assert CatalogEntry.from_dict(data) == entry


# ══════════════════════════════════════════════════════════════
# MERGE
# ══════════════════════════════════════════════════════════════

class TestMergeQuantities:
    def test_absent_old_takes_new(self):
        new = CatalogEntry.of("A123", "Apple", "0.50", "1.00", 5)
        assert merge_quantities(None, new) is new

    def test_sums_quantity_and_takes_new_fields(self):
        old = CatalogEntry.of("A123", "Apple", "0.50", "1.00", 5)
        new = CatalogEntry.of("A123", "Green Apple", "0.60", "1.20", 7)
        merged = merge_quantities(old, new)
        assert merged.quantity == 12
        assert merged.name == "Green Apple"
        assert merged.wholesale_price == Decimal("0.60")
        assert merged.retail_price == Decimal("1.20")

    def test_upc_mismatch_rejected(self):
        old = CatalogEntry.of("A123", "Apple", "0.50", "1.00", 5)
        new = CatalogEntry.of("B234", "Peach", "0.35", "0.75", 5)
        with pytest.raises(InvalidArgumentError, match="different upc"):
            merge_quantities(old, new)

    def test_new_is_required(self):
        with pytest.raises(InvalidArgumentError, match="required"):
            merge_quantities(None, None)

    def test_line_items_merge_the_same_way(self):
        old = LineItem(name="Apple", unit_price=Decimal("1.00"), quantity=2)
        new = LineItem(name="Apple", unit_price=Decimal("1.10"), quantity=1)
        merged = merge_quantities(old, new)
        assert merged.quantity == 3
        assert merged.unit_price == Decimal("1.10")
        assert merged.extended_price == Decimal("3.30")


# ══════════════════════════════════════════════════════════════
# PRECISION LIMITS
# ══════════════════════════════════════════════════════════════

class TestPrecisionLimits:
    def test_to_decimal_keeps_full_precision(self):
        from store.primitives.money import to_decimal
        assert to_decimal("2.745") == Decimal("2.745")

    def test_to_decimal_rejects_none(self):
        from store.primitives.money import to_decimal
        with pytest.raises(InvalidArgumentError, match="required"):
            to_decimal(None)

    def test_amount_too_large_to_quantize(self):
        with pytest.raises(InvalidArgumentError, match="too large"):
            to_money(Decimal("1e30"))

    def test_catalog_entry_with_huge_price(self):
        with pytest.raises(InvalidArgumentError, match="retail_price"):
            CatalogEntry.of("A123", "Apple", "0.50", "1e30", 1)

    def test_extended_price_overflow(self):
        with pytest.raises(InvalidArgumentError, match="extended_price"):
            extended_price(Decimal("99999999999999999999.99"), 10 ** 10)
