"""Repository layer for daily sales aggregates."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import Row, func, select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from lotto_pro.models.daily_report import DailyReport
from lotto_pro.models.inventory import StoreLotteryInventory
from lotto_pro.models.lottery_master import LotteryMaster

_KEY_COLUMNS = ["store_id", "lottery_id", "book_id", "report_date"]


class DailyReportRepository:
    """Additive upserts and report reads."""

    def add_sales(
        self,
        session: Session,
        *,
        store_id: int,
        lottery_id: int,
        book_id: int,
        scan_id: int,
        report_date: date,
        tickets_sold: int,
        total_sales: Decimal,
    ) -> None:
        """Add a sold-delta to the row for ``report_date``, creating it if needed.

        Totals are always incremented, never replaced, so several scans of the
        same book on one day accumulate.
        """

        values = {
            "store_id": store_id,
            "lottery_id": lottery_id,
            "book_id": book_id,
            "scan_id": scan_id,
            "report_date": report_date,
            "tickets_sold": tickets_sold,
            "total_sales": total_sales,
        }
        table = DailyReport.__table__
        dialect = session.get_bind().dialect.name

        if dialect in ("postgresql", "sqlite"):
            insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = insert(table).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=_KEY_COLUMNS,
                set_={
                    "scan_id": stmt.excluded.scan_id,
                    "tickets_sold": table.c.tickets_sold + stmt.excluded.tickets_sold,
                    "total_sales": table.c.total_sales + stmt.excluded.total_sales,
                    "updated_at": func.now(),
                },
            )
            session.execute(stmt)
            return

        if dialect in ("mysql", "mariadb"):
            stmt = mysql.insert(table).values(**values)
            stmt = stmt.on_duplicate_key_update(
                scan_id=stmt.inserted.scan_id,
                tickets_sold=table.c.tickets_sold + stmt.inserted.tickets_sold,
                total_sales=table.c.total_sales + stmt.inserted.total_sales,
                updated_at=func.now(),
            )
            session.execute(stmt)
            return

        self._add_sales_locked(session, values)

    def _add_sales_locked(self, session: Session, values: dict) -> None:
        stmt = (
            select(DailyReport)
            .where(*(getattr(DailyReport, col) == values[col] for col in _KEY_COLUMNS))
            .with_for_update()
        )
        row = session.scalars(stmt).first()
        if row is None:
            session.add(DailyReport(**values))
        else:
            row.scan_id = values["scan_id"]
            row.tickets_sold = row.tickets_sold + values["tickets_sold"]
            row.total_sales = row.total_sales + values["total_sales"]
        session.flush()

    def book_breakdown(self, session: Session, store_id: int, start: date, end: date) -> Sequence[Row]:
        """Per-book totals for ``start..end`` inclusive."""

        stmt = (
            select(
                DailyReport.book_id,
                DailyReport.lottery_id,
                LotteryMaster.lottery_name,
                LotteryMaster.lottery_number,
                StoreLotteryInventory.serial_number,
                func.max(DailyReport.scan_id).label("scan_id"),
                func.min(DailyReport.report_date).label("first_date"),
                func.max(DailyReport.report_date).label("last_date"),
                func.sum(DailyReport.tickets_sold).label("tickets_sold"),
                func.sum(DailyReport.total_sales).label("total_sales"),
            )
            .join(LotteryMaster, DailyReport.lottery_id == LotteryMaster.lottery_id)
            .join(StoreLotteryInventory, DailyReport.book_id == StoreLotteryInventory.id)
            .where(
                DailyReport.store_id == store_id,
                DailyReport.report_date >= start,
                DailyReport.report_date <= end,
            )
            .group_by(
                DailyReport.book_id,
                DailyReport.lottery_id,
                LotteryMaster.lottery_name,
                LotteryMaster.lottery_number,
                StoreLotteryInventory.serial_number,
            )
            .order_by(LotteryMaster.lottery_name, StoreLotteryInventory.serial_number)
        )
        return session.execute(stmt).all()

    def daily_totals(self, session: Session, store_id: int, start: date, end: date) -> Sequence[Row]:
        stmt = (
            select(
                DailyReport.report_date,
                func.sum(DailyReport.tickets_sold).label("tickets_sold"),
                func.sum(DailyReport.total_sales).label("revenue"),
            )
            .where(
                DailyReport.store_id == store_id,
                DailyReport.report_date >= start,
                DailyReport.report_date <= end,
            )
            .group_by(DailyReport.report_date)
            .order_by(DailyReport.report_date)
        )
        return session.execute(stmt).all()

    def lottery_totals(self, session: Session, store_id: int, start: date, end: date) -> Sequence[Row]:
        revenue = func.sum(DailyReport.total_sales).label("revenue")
        stmt = (
            select(
                DailyReport.lottery_id,
                LotteryMaster.lottery_name,
                LotteryMaster.lottery_number,
                func.sum(DailyReport.tickets_sold).label("tickets_sold"),
                revenue,
            )
            .join(LotteryMaster, DailyReport.lottery_id == LotteryMaster.lottery_id)
            .where(
                DailyReport.store_id == store_id,
                DailyReport.report_date >= start,
                DailyReport.report_date <= end,
            )
            .group_by(DailyReport.lottery_id, LotteryMaster.lottery_name, LotteryMaster.lottery_number)
            .order_by(revenue.desc())
        )
        return session.execute(stmt).all()
