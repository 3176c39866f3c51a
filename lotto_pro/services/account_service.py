"""Store owner account removal."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from lotto_pro.auth import ROLE_STORE_OWNER, AuthUser
from lotto_pro.errors import ForbiddenError
from lotto_pro.repositories.store_repository import StoreRepository

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, repository: StoreRepository | None = None) -> None:
        self._repo = repository or StoreRepository()

    def delete_owner_account(self, session: Session, user: AuthUser | None) -> dict[str, int]:
        """Delete the owner, their stores, books, scans and daily reports.

        All-or-nothing: any failure rolls the whole fan-out back.
        """

        if user is None or user.role != ROLE_STORE_OWNER:
            raise ForbiddenError("Only store owners can delete this account")

        try:
            counts = self._repo.delete_owner_cascade(session, user.id)
            session.commit()
        except Exception:
            session.rollback()
            logger.exception("Delete store owner account %s failed, rolled back", user.id)
            raise

        logger.info("Deleted store owner %s: %s", user.id, counts)
        return counts
