"""Decode scan payloads into lottery number, book serial and ticket number.

Two barcode encodings are accepted:

* dash-delimited ``"045-000123-015"``
* fixed-width digits ``"045000123015..."``: 3 chars lottery number, 6 chars
  book serial, 3 chars ticket number; trailing digits are ignored.

Clients that decode barcodes themselves may send the three fields directly.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lotto_pro.errors import (
    InvalidDirectionError,
    InvalidFormatError,
    InvalidNumberError,
    MissingFieldsError,
)
from lotto_pro.models.enums import Direction

MIN_NUMERIC_LENGTH = 12

_WHITESPACE = re.compile(r"\s+")
_INTEGER = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class ParsedScan:
    lottery_number: str
    ticket_serial: str
    ticket_number: int
    raw: str


def _to_int(value: Any) -> int | None:
    """Integer coercion that rejects bools, fractions and junk."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if not _INTEGER.match(text):
        return None
    return int(text)


def _parse_dashed(raw: str) -> ParsedScan:
    parts = raw.split("-")
    if len(parts) == 3:
        lottery_number, ticket_serial, pack = (p.strip() for p in parts)
        ticket_number = _to_int(pack) if pack else None
        if lottery_number and ticket_serial and ticket_number is not None:
            return ParsedScan(lottery_number, ticket_serial, ticket_number, raw)

    raise InvalidFormatError("Invalid barcode format. Expected XXX-YYYYYY-ZZZ")


def _parse_numeric(raw: str, manual_ticket: Any) -> ParsedScan:
    numeric = _WHITESPACE.sub("", raw)
    if not numeric.isdigit() or len(numeric) < MIN_NUMERIC_LENGTH:
        raise InvalidFormatError(
            "Invalid barcode format. Expected digits string with at least "
            f"{MIN_NUMERIC_LENGTH} characters"
        )

    ticket_number = int(numeric[9:12])
    if manual_ticket is not None:
        override = _to_int(manual_ticket)
        if override is None:
            raise InvalidNumberError("ticket_number must be a number")
        ticket_number = override

    return ParsedScan(numeric[0:3], numeric[3:9], ticket_number, raw)


def parse_scan_input(payload: Mapping[str, Any]) -> ParsedScan:
    """Resolve a scan payload.

    ``barcode_data`` wins when present. Otherwise ``lottery_number``,
    ``ticket_serial`` and ``ticket_number`` (or its alias ``pack_number``) must
    all be supplied.

    Raises:
        InvalidFormatError: barcode does not match either encoding.
        InvalidNumberError: ticket number is not an integer.
        MissingFieldsError: neither input shape is complete.
    """

    barcode = payload.get("barcode_data")
    if barcode is not None and str(barcode).strip():
        raw = str(barcode).strip()
        if "-" in raw:
            return _parse_dashed(raw)
        return _parse_numeric(raw, payload.get("ticket_number"))

    lottery_number = str(payload.get("lottery_number") or "").strip()
    ticket_serial = str(payload.get("ticket_serial") or "").strip()
    direct_ticket = payload.get("pack_number")
    if direct_ticket is None:
        direct_ticket = payload.get("ticket_number")

    if lottery_number and ticket_serial and direct_ticket is not None and str(direct_ticket).strip():
        ticket_number = _to_int(direct_ticket)
        if ticket_number is None:
            raise InvalidNumberError("ticket number must be a number")
        return ParsedScan(
            lottery_number=lottery_number,
            ticket_serial=ticket_serial,
            ticket_number=ticket_number,
            raw=f"{lottery_number}-{ticket_serial}-{ticket_number}",
        )

    raise MissingFieldsError()


def parse_direction(value: Any) -> Direction | None:
    """Normalize an optional direction; blank means "not supplied"."""

    if value is None:
        return None
    normalized = str(value).strip().lower()
    if not normalized:
        return None
    if normalized == Direction.ASC.value:
        return Direction.ASC
    if normalized == Direction.DESC.value:
        return Direction.DESC
    raise InvalidDirectionError()
