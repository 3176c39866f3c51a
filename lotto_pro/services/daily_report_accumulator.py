"""Fold scan deltas into per-day, per-book sales totals."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lotto_pro.repositories.daily_report_repository import DailyReportRepository

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def sales_amount(tickets_sold: int, price: Decimal | int | str) -> Decimal:
    return (Decimal(tickets_sold) * Decimal(str(price))).quantize(CENTS)


class DailyReportAccumulator:
    def __init__(self, repository: DailyReportRepository | None = None) -> None:
        self._repo = repository or DailyReportRepository()

    def accumulate(
        self,
        session: Session,
        *,
        store_id: int,
        lottery_id: int,
        book_id: int,
        tickets_sold: int,
        price: Decimal,
        scan_id: int | None,
        report_date: date | None = None,
    ) -> bool:
        """Add ``tickets_sold`` to today's row for the book.

        Skipped when nothing was sold or the scan was not logged (the row must
        point at a scan). Failures are logged and swallowed; returns whether
        the totals were written.
        """

        if tickets_sold <= 0 or scan_id is None:
            return False

        try:
            self._repo.add_sales(
                session,
                store_id=store_id,
                lottery_id=lottery_id,
                book_id=book_id,
                scan_id=scan_id,
                report_date=report_date or date.today(),
                tickets_sold=tickets_sold,
                total_sales=sales_amount(tickets_sold, price),
            )
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.warning(
                "Failed to persist daily report entry for book %s (scan %s)", book_id, scan_id, exc_info=True
            )
            return False
        return True
