"""Store inventory routes."""

from __future__ import annotations

from flask import Blueprint

from lotto_pro.auth import STORE_ROLES, current_user, require_roles
from lotto_pro.db import get_session
from lotto_pro.schemas.scan import InventorySchema, LotteryMasterSchema
from lotto_pro.services.report_service import ReportService
from lotto_pro.utils.responses import ok

inventory_bp = Blueprint("inventory", __name__)

_schema = InventorySchema(many=True)
_master_schema = LotteryMasterSchema()
_service = ReportService()


@inventory_bp.get("/store/<int:store_id>/inventory")
@require_roles(*STORE_ROLES)
def store_inventory(store_id: int):
    books = _service.store_inventory(get_session(), store_id, current_user())
    return ok({"inventory": _schema.dump(books)})


@inventory_bp.get("/store/<int:store_id>/lottery/<int:lottery_id>")
@require_roles(*STORE_ROLES)
def lottery_detail(store_id: int, lottery_id: int):
    """A game's catalog record and the store's books of it."""

    detail = _service.lottery_detail(get_session(), store_id, current_user(), lottery_id)
    return ok({"lottery": _master_schema.dump(detail["lottery"]), "books": _schema.dump(detail["books"])})
