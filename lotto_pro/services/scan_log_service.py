"""Best-effort scan audit log."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lotto_pro.repositories.scan_log_repository import ScanLogRepository

logger = logging.getLogger(__name__)


class ScanLogService:
    def __init__(self, repository: ScanLogRepository | None = None) -> None:
        self._repo = repository or ScanLogRepository()

    def record(
        self,
        session: Session,
        *,
        store_id: int,
        barcode_data: str,
        lottery_id: int,
        ticket_number: int,
        scanned_by: int | None,
        scanned_at: datetime | None = None,
    ) -> int | None:
        """Append a log row in its own transaction.

        Returns the new scan id, or None when the write failed. A failure is
        logged and never propagated.
        """

        try:
            entry = self._repo.create(
                session,
                store_id=store_id,
                barcode_data=barcode_data,
                lottery_id=lottery_id,
                ticket_number=ticket_number,
                scanned_by=scanned_by,
                scanned_at=scanned_at,
            )
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.warning("Failed to log scan event for store %s (%s)", store_id, barcode_data, exc_info=True)
            return None
        return entry.id
