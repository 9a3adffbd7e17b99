"""
Tests for store.cli - the checkout runner.
"""

import pytest

from store.cli import main, run

SEED_CSV = (
    "upc,name,wholesalePrice,retailPrice,quantity\n"
    "A123,Apple,0.50,1.00,100\n"
    "B234,Peach,0.35,0.75,200\n"
)


@pytest.fixture
def inventory_file(tmp_path):
    path = tmp_path / "stock.csv"
    path.write_text(SEED_CSV, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("STORE_NAME", "STORE_CURRENCY", "STORE_LOCALE"):
        monkeypatch.delenv(name, raising=False)


class TestCheckoutCli:
    def test_run_returns_receipt(self, inventory_file):
        receipt = run(
            inventory_path=str(inventory_file),
            upcs=["A123", "A123", "B234"],
            amount_tendered="3.00",
        )
        assert "Total Products Bought: 3" in receipt
        assert "Change: $0.25" in receipt

    def test_main_prints_receipt(self, inventory_file, capsys):
        code = main(["--inventory", str(inventory_file), "--pay", "5", "A123", "P9889"])
        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("BridgePhase Convenience Store\n")
        assert "1 Apple @ $1.00: $1.00" in out
        assert "Change: $4.00" in out

    def test_store_name_from_env(self, inventory_file, capsys, monkeypatch):
        monkeypatch.setenv("STORE_NAME", "Night Owl")
        main(["--inventory", str(inventory_file), "--pay", "1", "A123"])
        assert capsys.readouterr().out.startswith("Night Owl\n")

    def test_insufficient_funds_exit_code(self, inventory_file, capsys):
        code = main(["--inventory", str(inventory_file), "--pay", "0.50", "A123"])
        assert code == 1
        assert "insufficient" in capsys.readouterr().err

    def test_missing_inventory_file(self, tmp_path, capsys):
        code = main(["--inventory", str(tmp_path / "missing.csv"), "--pay", "1"])
        assert code == 1
        assert "error:" in capsys.readouterr().err

    def test_bad_inventory_file(self, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        path.write_text("sku,name\n", encoding="utf-8")
        code = main(["--inventory", str(path), "--pay", "1"])
        assert code == 1
        assert "Unexpected header field" in capsys.readouterr().err

    def test_undecodable_inventory_file(self, tmp_path, capsys):
        path = tmp_path / "latin1.csv"
        path.write_bytes(SEED_CSV.encode("utf-8") + b"C123,Cr\xe8me,2.15,4.50,40\n")
        code = main(["--inventory", str(path), "--pay", "1", "A123"])
        assert code == 1
        err = capsys.readouterr().err
        assert "UTF-8" in err
        assert "line 4" in err

    def test_oversized_price_in_inventory_file(self, tmp_path, capsys):
        path = tmp_path / "huge.csv"
        path.write_text(
            SEED_CSV + "C123,Milk,2.15," + "9" * 40 + ",40\n", encoding="utf-8",
        )
        code = main(["--inventory", str(path), "--pay", "1", "A123"])
        assert code == 1
        assert "retailPrice" in capsys.readouterr().err
