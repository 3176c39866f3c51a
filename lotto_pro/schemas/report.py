"""Schemas for the sales report API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

from lotto_pro.schemas.scan import ScanHistorySchema
from lotto_pro.services.report_service import ReportRange


class DailyReportQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    date = fields.Date(required=False, load_default=None)
    range_name = fields.String(
        data_key="range",
        required=False,
        load_default=None,
        validate=validate.OneOf([r.value for r in ReportRange]),
    )
    start_date = fields.Date(required=False, load_default=None)
    end_date = fields.Date(required=False, load_default=None)

    @validates_schema
    def _validate_custom_range(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if data.get("date") is not None or data.get("range_name") != ReportRange.CUSTOM.value:
            return
        missing = [name for name in ("start_date", "end_date") if data.get(name) is None]
        if missing:
            raise ValidationError({name: ["Required for a custom range"] for name in missing})
        if data["start_date"] > data["end_date"]:
            raise ValidationError({"start_date": ["start_date must be on or before end_date"]})


class MonthlyReportQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    month = fields.String(
        required=False,
        load_default=None,
        validate=validate.Regexp(r"^\d{4}-(0[1-9]|1[0-2])$", error="Invalid month format. Use YYYY-MM"),
    )


class ScanLogQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    date = fields.Date(required=False, load_default=None)
    limit = fields.Integer(required=False, load_default=100)


class BookSalesSchema(Schema):
    book_id = fields.Integer()
    lottery_id = fields.Integer()
    lottery_name = fields.String()
    lottery_number = fields.String()
    serial_number = fields.String()
    scan_id = fields.Integer()
    first_date = fields.Date()
    last_date = fields.Date()
    tickets_sold = fields.Integer()
    total_sales = fields.Decimal(places=2, as_string=True)


class DailySalesReportSchema(Schema):
    store_id = fields.Integer()
    start_date = fields.Date()
    end_date = fields.Date()
    total_tickets_sold = fields.Integer()
    total_revenue = fields.Decimal(places=2, as_string=True)
    breakdown = fields.List(fields.Nested(BookSalesSchema), attribute="rows")


class DailyTotalSchema(Schema):
    report_date = fields.Date()
    tickets_sold = fields.Integer()
    revenue = fields.Decimal(places=2, as_string=True)


class LotteryTotalSchema(Schema):
    lottery_id = fields.Integer()
    lottery_name = fields.String()
    lottery_number = fields.String()
    tickets_sold = fields.Integer()
    revenue = fields.Decimal(places=2, as_string=True)


class MonthlySalesReportSchema(Schema):
    store_id = fields.Integer()
    month = fields.String()
    total_tickets_sold = fields.Integer()
    total_revenue = fields.Decimal(places=2, as_string=True)
    daily_totals = fields.List(fields.Nested(DailyTotalSchema))
    lottery_totals = fields.List(fields.Nested(LotteryTotalSchema))


class StoreInfoSchema(Schema):
    store_id = fields.Integer()
    store_name = fields.String()
    state = fields.String(allow_none=True)


class InventorySummarySchema(Schema):
    total_books = fields.Integer()
    total_tickets = fields.Integer()
    sold_tickets = fields.Integer()
    remaining_tickets = fields.Integer()
    total_revenue = fields.Decimal(places=2, as_string=True)


class LotteryRevenueSchema(Schema):
    lottery_id = fields.Integer()
    lottery_name = fields.String()
    lottery_number = fields.String()
    price = fields.Decimal(places=2, as_string=True)
    books = fields.Integer()
    tickets_sold = fields.Integer()
    remaining_tickets = fields.Integer()
    revenue = fields.Decimal(places=2, as_string=True)


class StoreReportSchema(Schema):
    """Store dashboard: inventory totals, revenue per game and recent activity."""

    store = fields.Nested(StoreInfoSchema)
    summary = fields.Nested(InventorySummarySchema)
    revenue_by_lottery = fields.List(fields.Nested(LotteryRevenueSchema))
    recent_scans = fields.List(fields.Nested(ScanHistorySchema))
    sales_by_date = fields.List(fields.Nested(DailyTotalSchema))
