import pytest

from lotto_pro.errors import InvalidDirectionError, InvalidFormatError, InvalidNumberError, MissingFieldsError
from lotto_pro.models.enums import Direction
from lotto_pro.services.barcode_parser import ParsedScan, parse_direction, parse_scan_input


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("045-000123-001", ParsedScan("045", "000123", 1, "045-000123-001")),
        ("045-000123-015", ParsedScan("045", "000123", 15, "045-000123-015")),
        ("  912-654321-150 ", ParsedScan("912", "654321", 150, "912-654321-150")),
    ],
)
def test_dashed_barcode(raw, expected):
    assert parse_scan_input({"barcode_data": raw}) == expected


@pytest.mark.parametrize("raw", ["045-000123", "045-000123-001-9", "045--001", "-000123-001", "045-000123-abc"])
def test_dashed_barcode_rejects_bad_segments(raw):
    with pytest.raises(InvalidFormatError):
        parse_scan_input({"barcode_data": raw})


def test_fixed_width_matches_structured_input():
    from_barcode = parse_scan_input({"barcode_data": "123456789012"})
    structured = parse_scan_input({"lottery_number": "123", "ticket_serial": "456789", "ticket_number": 12})

    assert from_barcode.lottery_number == structured.lottery_number == "123"
    assert from_barcode.ticket_serial == structured.ticket_serial == "456789"
    assert from_barcode.ticket_number == structured.ticket_number == 12


def test_fixed_width_ignores_trailing_digits_and_whitespace():
    parsed = parse_scan_input({"barcode_data": "045 000123 015 9981"})

    assert (parsed.lottery_number, parsed.ticket_serial, parsed.ticket_number) == ("045", "000123", 15)


@pytest.mark.parametrize("raw", ["12345678901", "04500012301X", "abcdefghijkl"])
def test_fixed_width_rejects_short_or_non_numeric(raw):
    with pytest.raises(InvalidFormatError):
        parse_scan_input({"barcode_data": raw})


def test_manual_ticket_number_overrides_numeric_barcode():
    parsed = parse_scan_input({"barcode_data": "045000123015", "ticket_number": "20"})
    assert parsed.ticket_number == 20


def test_manual_ticket_number_must_be_numeric():
    with pytest.raises(InvalidNumberError):
        parse_scan_input({"barcode_data": "045000123015", "ticket_number": "twenty"})


def test_structured_input_builds_raw_and_accepts_pack_alias():
    parsed = parse_scan_input({"lottery_number": "045", "ticket_serial": "000123", "pack_number": "7"})

    assert parsed == ParsedScan("045", "000123", 7, "045-000123-7")


def test_structured_input_rejects_non_numeric_ticket():
    with pytest.raises(InvalidNumberError):
        parse_scan_input({"lottery_number": "045", "ticket_serial": "000123", "ticket_number": "1.5"})


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"barcode_data": "   "},
        {"lottery_number": "045", "ticket_serial": "000123"},
        {"lottery_number": "045", "ticket_number": 3},
    ],
)
def test_missing_fields(payload):
    with pytest.raises(MissingFieldsError):
        parse_scan_input(payload)


@pytest.mark.parametrize(
    "value, expected",
    [(None, None), ("", None), ("asc", Direction.ASC), (" DESC ", Direction.DESC)],
)
def test_parse_direction(value, expected):
    assert parse_direction(value) is expected


def test_parse_direction_rejects_other_values():
    with pytest.raises(InvalidDirectionError):
        parse_direction("up")
