"""Account routes."""

from __future__ import annotations

from flask import Blueprint

from lotto_pro.auth import ROLE_STORE_OWNER, current_user, require_roles
from lotto_pro.db import get_session
from lotto_pro.services.account_service import AccountService
from lotto_pro.utils.responses import ok

account_bp = Blueprint("account", __name__)

_service = AccountService()


@account_bp.delete("/account")
@require_roles(ROLE_STORE_OWNER)
def delete_account():
    """Delete the calling store owner together with all their stores."""

    deleted = _service.delete_owner_account(get_session(), current_user())
    return ok(
        {
            "message": "Store owner account and associated stores deleted successfully",
            "deleted": deleted,
        }
    )
