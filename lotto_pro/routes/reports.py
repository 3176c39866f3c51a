"""Sales report routes."""

from __future__ import annotations

from flask import Blueprint, request

from lotto_pro.auth import STORE_ROLES, current_user, require_roles
from lotto_pro.db import get_session
from lotto_pro.schemas.report import (
    DailyReportQuerySchema,
    DailySalesReportSchema,
    MonthlyReportQuerySchema,
    MonthlySalesReportSchema,
    ScanLogQuerySchema,
    StoreReportSchema,
)
from lotto_pro.schemas.scan import ScanHistorySchema
from lotto_pro.services.report_service import ReportService, month_window, resolve_window
from lotto_pro.utils.responses import ok

reports_bp = Blueprint("reports", __name__)

MAX_SCAN_LOG_LIMIT = 500

_daily_query_schema = DailyReportQuerySchema()
_monthly_query_schema = MonthlyReportQuerySchema()
_scan_log_query_schema = ScanLogQuerySchema()
_daily_schema = DailySalesReportSchema()
_monthly_schema = MonthlySalesReportSchema()
_store_report_schema = StoreReportSchema()
_scan_log_schema = ScanHistorySchema(many=True)
_service = ReportService()


@reports_bp.get("/store/<int:store_id>")
@require_roles(*STORE_ROLES)
def store_report(store_id: int):
    """Inventory and revenue overview of one store."""

    report = _service.store_summary(get_session(), store_id, current_user())
    return ok(_store_report_schema.dump(report))


@reports_bp.get("/store/<int:store_id>/daily")
@require_roles(*STORE_ROLES)
def daily_sales(store_id: int):
    """Per-book sales for one day or a date range."""

    args = _daily_query_schema.load(request.args)
    window = resolve_window(
        today=_service.today(),
        on_date=args["date"],
        range_name=args["range_name"],
        start_date=args["start_date"],
        end_date=args["end_date"],
    )

    summary = _service.daily_sales(get_session(), store_id, current_user(), window)
    body = _daily_schema.dump(summary)
    if window.is_single_day:
        body["date"] = window.start.isoformat()
    return ok(body)


@reports_bp.get("/store/<int:store_id>/monthly")
@require_roles(*STORE_ROLES)
def monthly_sales(store_id: int):
    """Daily and per-game totals for a calendar month."""

    args = _monthly_query_schema.load(request.args)
    month = args["month"] or _service.today().strftime("%Y-%m")

    report = _service.monthly_sales(get_session(), store_id, current_user(), month_window(month))
    report["month"] = month
    return ok(_monthly_schema.dump(report))


@reports_bp.get("/store/<int:store_id>/scan-logs")
@require_roles(*STORE_ROLES)
def scan_logs(store_id: int):
    """Scan log rows, optionally for a single day."""

    args = _scan_log_query_schema.load(request.args)
    limit = min(max(int(args["limit"]), 1), MAX_SCAN_LOG_LIMIT)

    rows = _service.scan_history(get_session(), store_id, current_user(), limit=limit, on_date=args["date"])
    return ok({"scan_logs": _scan_log_schema.dump(rows)})
