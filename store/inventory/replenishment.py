"""
Store Replenishment Input - Comma-Delimited Product Records
=============================================================
Reads replenishment batches in the supplier format:

    upc,name,wholesalePrice,retailPrice,quantity
    A123,Apple,0.50,1.00,100
    B234,Peach,0.35,0.75,200

RULES:
- The header line is mandatory and must name the five fields exactly,
  in that order.
- Blank lines between records are ignored.
- Fields are trimmed; there is no quoting.
- Prices are plain ASCII decimals (`1`, `0.50`, `.50`), quantities
  plain ASCII integers with an optional sign. No exponents, digit
  separators or non-ASCII digits.
- Byte input must be UTF-8; an undecodable line is a parse error.
- Parsing is lazy: records are yielded one at a time so the inventory
  store commits every record that precedes a malformed line.
- The source stream is never closed here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import IO, Iterable, Iterator, Optional, Tuple, Union

from store.errors import InvalidArgumentError, ReplenishmentParseError
from store.primitives.catalog import CatalogEntry
from store.primitives.money import to_money

HEADER_FIELDS = ("upc", "name", "wholesalePrice", "retailPrice", "quantity")
FIELD_SEPARATOR = ","
PRICE_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
QUANTITY_PATTERN = re.compile(r"[+-]?[0-9]+")

ReplenishmentSource = Union[str, bytes, IO, Iterable[str]]


# ══════════════════════════════════════════════════════════════
# RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReplenishmentRecord:
    """One parsed supplier line. quantity_delta is added to stock on hand."""
    upc: str
    name: str
    wholesale_price: Decimal
    retail_price: Decimal
    quantity_delta: int
    line_number: Optional[int] = None

    def to_entry(self) -> CatalogEntry:
        return CatalogEntry(
            upc=self.upc,
            name=self.name,
            wholesale_price=self.wholesale_price,
            retail_price=self.retail_price,
            quantity=self.quantity_delta,
        )


# ══════════════════════════════════════════════════════════════
# PARSER
# ══════════════════════════════════════════════════════════════

def _split(line: str) -> list[str]:
    return [part.strip() for part in line.split(FIELD_SEPARATOR)]


class ReplenishmentParser:
    """
    Line-level parser for the replenishment format.

    Stateless; one instance can be shared.
    """

    expected_field_count = len(HEADER_FIELDS)

    def read_header(self, line: Optional[str]) -> bool:
        """
        Validate the header line.

        Returns False when there is no header at all (empty input),
        True when the header is valid.

        Raises:
            ReplenishmentParseError: a field is misnamed or the field
                count is wrong.
        """
        if line is None:
            return False
        fields = _split(line.rstrip("\r\n"))
        for number, (actual, expected) in enumerate(
            zip(fields, HEADER_FIELDS), start=1
        ):
            if actual != expected:
                raise ReplenishmentParseError(
                    f"Unexpected header field: number={number}, "
                    f"expected '{expected}' but got '{actual}'",
                    line_number=1,
                    field=expected,
                    line=line,
                )
        if len(fields) != self.expected_field_count:
            raise ReplenishmentParseError(
                f"Unexpected header: field count mismatch: expected "
                f"{self.expected_field_count} fields but got {len(fields)} "
                f"fields instead: {line.strip()}",
                line_number=1,
                line=line,
            )
        return True

    def parse(self, line_number: int, line: str) -> ReplenishmentRecord:
        """
        Parse one record line.

        Raises:
            InvalidArgumentError: line is None.
            ReplenishmentParseError: wrong field count or a field value
                that does not parse.
        """
        if line is None:
            raise InvalidArgumentError(
                "The 'line' argument is required; it must not be None."
            )
        fields = _split(line.rstrip("\r\n"))
        if len(fields) != self.expected_field_count:
            raise ReplenishmentParseError(
                f"Line does not contain the correct number of fields: "
                f"expected={self.expected_field_count}, actual={len(fields)}",
                line_number=line_number,
                line=line,
            )
        upc, name, wholesale, retail, quantity = fields
        if not upc:
            raise ReplenishmentParseError(
                "upc must not be empty",
                line_number=line_number, field="upc", line=line,
            )
        return ReplenishmentRecord(
            upc=upc,
            name=name,
            wholesale_price=self._parse_price(
                wholesale, "wholesalePrice", line_number, line,
            ),
            retail_price=self._parse_price(
                retail, "retailPrice", line_number, line,
            ),
            quantity_delta=self._parse_quantity(quantity, line_number, line),
            line_number=line_number,
        )

    def _parse_price(
        self, raw: str, field: str, line_number: int, line: str,
    ) -> Decimal:
        if not PRICE_PATTERN.fullmatch(raw):
            raise ReplenishmentParseError(
                f"Invalid {field} value '{raw}'",
                line_number=line_number, field=field, line=line,
            )
        try:
            return to_money(Decimal(raw), field)
        except InvalidArgumentError as exc:
            raise ReplenishmentParseError(
                f"Invalid {field} value '{raw}': {exc}",
                line_number=line_number, field=field, line=line,
            ) from exc

    def _parse_quantity(self, raw: str, line_number: int, line: str) -> int:
        if not QUANTITY_PATTERN.fullmatch(raw):
            raise ReplenishmentParseError(
                f"Invalid quantity value '{raw}'",
                line_number=line_number, field="quantity", line=line,
            )
        return int(raw)


# ══════════════════════════════════════════════════════════════
# STREAM READER
# ══════════════════════════════════════════════════════════════

def _decode(line: bytes, line_number: int) -> str:
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ReplenishmentParseError(
            f"Line is not valid UTF-8: {exc.reason} at byte {exc.start}",
            line_number=line_number,
        ) from exc


def _iter_lines(source: ReplenishmentSource) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, text) pairs, 1-based."""
    if source is None:
        raise InvalidArgumentError(
            "The 'source' argument is required; it must not be None."
        )
    if isinstance(source, (str, bytes)):
        raw_lines = iter(source.splitlines())
    else:
        raw_lines = iter(source)

    line_number = 0
    while True:
        line_number += 1
        try:
            line = next(raw_lines)
        except StopIteration:
            return
        except UnicodeDecodeError as exc:
            # text streams decode in chunks; the number is where reading stopped
            raise ReplenishmentParseError(
                f"Input is not valid UTF-8: {exc.reason}",
                line_number=line_number,
            ) from exc
        if isinstance(line, bytes):
            line = _decode(line, line_number)
        yield line_number, line


def parse_replenishment(
    source: ReplenishmentSource,
    parser: Optional[ReplenishmentParser] = None,
) -> Iterator[ReplenishmentRecord]:
    """
    Lazily yield records from a replenishment source.

    source may be a text or binary stream, a str/bytes payload or any
    iterable of lines. Line numbers are 1-based and count the header.
    Binary input gives exact line numbers for encoding errors.
    """
    parser = parser or ReplenishmentParser()
    lines = _iter_lines(source)
    first = next(lines, None)
    if not parser.read_header(None if first is None else first[1]):
        return
    for line_number, line in lines:
        if not line.strip():
            continue
        yield parser.parse(line_number, line)
