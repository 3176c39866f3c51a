"""Scan routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lotto_pro.auth import STORE_ROLES, current_user, require_roles
from lotto_pro.db import get_session
from lotto_pro.schemas.scan import (
    InventorySchema,
    LotteryMasterSchema,
    ScanHistoryQuerySchema,
    ScanHistorySchema,
    ScanRequestSchema,
)
from lotto_pro.services.report_service import ReportService
from lotto_pro.services.scan_service import ScanService
from lotto_pro.utils.responses import ok

scan_bp = Blueprint("scan", __name__)

MAX_HISTORY_LIMIT = 500

_request_schema = ScanRequestSchema()
_master_schema = LotteryMasterSchema()
_inventory_schema = InventorySchema()
_history_query_schema = ScanHistoryQuerySchema()
_history_schema = ScanHistorySchema(many=True)
_service = ScanService()
_reports = ReportService()


@scan_bp.post("/scan")
@require_roles(*STORE_ROLES)
def scan_ticket():
    """Record a scanned ticket against its book."""

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    session = get_session()
    outcome = _service.scan(session, int(data["store_id"]), data, current_user())

    if not outcome.game_active:
        return ok(
            {
                "status": "ok",
                "game_active": False,
                "reason": outcome.reason,
                "lottery_number": outcome.lottery_number,
            }
        )

    master = outcome.master
    book = outcome.book
    result = outcome.reconciliation
    inventory = {
        "id": book.id,
        "store_id": book.store_id,
        "lottery_id": master.lottery_id,
        "lottery_number": master.lottery_number,
        "lottery_name": master.lottery_name,
        "price": master.price,
        "serial_number": book.serial_number,
        "total_count": book.total_count,
        "current_count": book.current_count,
        "direction": book.direction,
        "status": book.status,
        "remaining_tickets": result.remaining,
        "updated_at": book.updated_at,
    }
    return ok(
        {
            "status": "ok",
            "game_active": True,
            "lottery_master": _master_schema.dump(master),
            "inventory": _inventory_schema.dump(inventory),
            "tickets_sold_this_scan": result.tickets_sold_this_scan,
            "scan_id": outcome.scan_id,
        }
    )


@scan_bp.get("/scan/history/<int:store_id>")
@require_roles(*STORE_ROLES)
def scan_history(store_id: int):
    """Most recent scans of a store."""

    args = _history_query_schema.load(request.args)
    limit = min(args["limit"] or int(current_app.config.get("SCAN_HISTORY_DEFAULT_LIMIT", 50)), MAX_HISTORY_LIMIT)

    history = _reports.scan_history(get_session(), store_id, current_user(), limit=limit)
    return ok({"scanHistory": _history_schema.dump(history)})
