"""Daily sales aggregate per book."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lotto_pro.models.base import Base, TimestampMixin


class DailyReport(TimestampMixin, Base):
    """Tickets sold and revenue for one book on one calendar day.

    Rows only grow: every positive scan delta is added to the existing totals.
    """

    __tablename__ = "daily_report"

    report_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.store_id"), nullable=False)
    lottery_id: Mapped[int] = mapped_column(ForeignKey("lottery_master.lottery_id"), nullable=False)
    book_id: Mapped[int] = mapped_column(ForeignKey("store_lottery_inventory.id"), nullable=False)
    # Most recent scan that contributed to this row.
    scan_id: Mapped[int] = mapped_column(ForeignKey("scanned_tickets.id"), nullable=False)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    tickets_sold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_sales: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0.00"))

    __table_args__ = (
        UniqueConstraint("store_id", "lottery_id", "book_id", "report_date", name="uq_daily_report"),
    )
