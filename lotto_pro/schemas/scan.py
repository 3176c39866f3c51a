"""Marshmallow schemas for the scan API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from lotto_pro.models.enums import BookStatus, Direction, GameStatus


class ScanRequestSchema(Schema):
    """Validate the envelope of a scan request.

    Barcode fields are passed through untouched; the barcode parser owns their
    format rules and error codes.
    """

    class Meta:
        unknown = EXCLUDE

    store_id = fields.Integer(required=True, validate=validate.Range(min=1))
    barcode_data = fields.Raw(required=False, allow_none=True)
    lottery_number = fields.Raw(required=False, allow_none=True)
    ticket_serial = fields.Raw(required=False, allow_none=True)
    ticket_number = fields.Raw(required=False, allow_none=True)
    pack_number = fields.Raw(required=False, allow_none=True)
    direction = fields.Raw(required=False, allow_none=True)


class LotteryMasterSchema(Schema):
    lottery_id = fields.Integer()
    lottery_number = fields.String()
    lottery_name = fields.String()
    price = fields.Decimal(places=2, as_string=True)
    start_number = fields.Integer()
    end_number = fields.Integer()
    total_tickets = fields.Method("get_total_tickets")
    status = fields.Enum(GameStatus, by_value=True)
    launch_date = fields.Date(allow_none=True)
    state = fields.String(allow_none=True)
    image_url = fields.String(allow_none=True)

    def get_total_tickets(self, obj) -> int:  # type: ignore[no-untyped-def]
        return abs(obj.end_number - obj.start_number) + 1


class InventorySchema(Schema):
    """A book as seen by clients, including derived remaining tickets."""

    id = fields.Integer()
    store_id = fields.Integer()
    lottery_id = fields.Integer()
    lottery_number = fields.String()
    lottery_name = fields.String()
    price = fields.Decimal(places=2, as_string=True)
    serial_number = fields.String()
    total_count = fields.Integer()
    current_count = fields.Integer()
    direction = fields.Enum(Direction, by_value=True)
    status = fields.Enum(BookStatus, by_value=True)
    remaining_tickets = fields.Integer()
    updated_at = fields.DateTime(allow_none=True)


class ScanHistorySchema(Schema):
    id = fields.Integer()
    store_id = fields.Integer()
    barcode_data = fields.String()
    lottery_id = fields.Integer()
    lottery_name = fields.String(allow_none=True)
    lottery_number = fields.String(allow_none=True)
    lottery_price = fields.Decimal(places=2, as_string=True, allow_none=True)
    ticket_number = fields.Integer()
    scanned_by = fields.Integer(allow_none=True)
    scanned_at = fields.DateTime()


class ScanHistoryQuerySchema(Schema):
    """History paging. A missing, non-numeric or non-positive limit means the default."""

    class Meta:
        unknown = EXCLUDE

    limit = fields.Integer(required=False, load_default=None)

    @pre_load
    def _ignore_unusable_limit(self, data, **kwargs):  # type: ignore[no-untyped-def]
        raw = str(data.get("limit", "")).strip()
        if raw.isdigit() and int(raw) > 0:
            return data
        return {key: value for key, value in data.items() if key != "limit"}
