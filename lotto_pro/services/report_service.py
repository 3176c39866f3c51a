"""Sales reports built from the daily aggregates and the scan log."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Callable

from sqlalchemy.orm import Session

from lotto_pro.auth import AuthUser
from lotto_pro.errors import NotFoundError, ValidationError
from lotto_pro.repositories.daily_report_repository import DailyReportRepository
from lotto_pro.repositories.inventory_repository import InventoryRepository
from lotto_pro.repositories.lottery_master_repository import LotteryMasterRepository
from lotto_pro.repositories.scan_log_repository import ScanLogRepository
from lotto_pro.services.inventory_engine import TicketRange, remaining_tickets
from lotto_pro.services.store_access import StoreAccessService


class ReportRange(str, Enum):
    TODAY = "today"
    LAST7 = "last7"
    THIS_MONTH = "this_month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: date

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end


def resolve_window(
    *,
    today: date,
    on_date: date | None = None,
    range_name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> DateWindow:
    """Turn the daily-report query options into an inclusive date window.

    An explicit ``date`` wins; without any option the window is today.
    """

    if on_date is not None:
        return DateWindow(on_date, on_date)

    selected = ReportRange(range_name) if range_name else ReportRange.TODAY
    if selected is ReportRange.TODAY:
        return DateWindow(today, today)
    if selected is ReportRange.LAST7:
        return DateWindow(today - timedelta(days=6), today)
    if selected is ReportRange.THIS_MONTH:
        return DateWindow(today.replace(day=1), today)

    if start_date is None or end_date is None:
        raise ValidationError("start_date and end_date are required for a custom range")
    if start_date > end_date:
        raise ValidationError("start_date must be on or before end_date")
    return DateWindow(start_date, end_date)


def month_window(month: str) -> DateWindow:
    """``"YYYY-MM"`` to the first and last day of that month."""

    try:
        year_text, month_text = month.split("-")
        year, month_no = int(year_text), int(month_text)
        last_day = calendar.monthrange(year, month_no)[1]
    except ValueError as exc:
        raise ValidationError("Invalid month format. Use YYYY-MM") from exc
    return DateWindow(date(year, month_no, 1), date(year, month_no, last_day))


def _money(value: Any) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


@dataclass
class SalesSummary:
    store_id: int
    start_date: date
    end_date: date
    total_tickets_sold: int = 0
    total_revenue: Decimal = Decimal("0.00")
    rows: list[dict[str, Any]] = field(default_factory=list)


class ReportService:
    def __init__(
        self,
        *,
        daily_reports: DailyReportRepository | None = None,
        scan_logs: ScanLogRepository | None = None,
        inventory: InventoryRepository | None = None,
        masters: LotteryMasterRepository | None = None,
        store_access: StoreAccessService | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._daily = daily_reports or DailyReportRepository()
        self._scan_logs = scan_logs or ScanLogRepository()
        self._inventory = inventory or InventoryRepository()
        self._masters = masters or LotteryMasterRepository()
        self._store_access = store_access or StoreAccessService()
        self._today = today

    def today(self) -> date:
        return self._today()

    def daily_sales(self, session: Session, store_id: int, user: AuthUser | None, window: DateWindow) -> SalesSummary:
        self._store_access.authorize(session, store_id, user)

        summary = SalesSummary(store_id=store_id, start_date=window.start, end_date=window.end)
        for row in self._daily.book_breakdown(session, store_id, window.start, window.end):
            item = dict(row._mapping)
            item["tickets_sold"] = int(item["tickets_sold"] or 0)
            item["total_sales"] = _money(item["total_sales"])
            summary.total_tickets_sold += item["tickets_sold"]
            summary.total_revenue += item["total_sales"]
            summary.rows.append(item)
        return summary

    def monthly_sales(self, session: Session, store_id: int, user: AuthUser | None, window: DateWindow) -> dict[str, Any]:
        self._store_access.authorize(session, store_id, user)

        daily_totals = [
            {
                "report_date": row.report_date,
                "tickets_sold": int(row.tickets_sold or 0),
                "revenue": _money(row.revenue),
            }
            for row in self._daily.daily_totals(session, store_id, window.start, window.end)
        ]
        lottery_totals = [
            {
                "lottery_id": row.lottery_id,
                "lottery_name": row.lottery_name,
                "lottery_number": row.lottery_number,
                "tickets_sold": int(row.tickets_sold or 0),
                "revenue": _money(row.revenue),
            }
            for row in self._daily.lottery_totals(session, store_id, window.start, window.end)
        ]
        return {
            "store_id": store_id,
            "total_tickets_sold": sum(r["tickets_sold"] for r in lottery_totals),
            "total_revenue": sum((r["revenue"] for r in lottery_totals), Decimal("0.00")),
            "daily_totals": daily_totals,
            "lottery_totals": lottery_totals,
        }

    def scan_history(
        self,
        session: Session,
        store_id: int,
        user: AuthUser | None,
        *,
        limit: int,
        on_date: date | None = None,
    ) -> list[dict[str, Any]]:
        self._store_access.authorize(session, store_id, user)
        return self._history_rows(session, store_id, limit=limit, on_date=on_date)

    def store_inventory(self, session: Session, store_id: int, user: AuthUser | None) -> list[dict[str, Any]]:
        """Books of a store with remaining tickets derived the same way scans derive them."""

        self._store_access.authorize(session, store_id, user)
        return self._books(session, store_id)

    def lottery_detail(
        self, session: Session, store_id: int, user: AuthUser | None, lottery_id: int
    ) -> dict[str, Any]:
        """One game's catalog record together with the store's books of it."""

        self._store_access.authorize(session, store_id, user)

        books = self._books(session, store_id, lottery_id=lottery_id)
        master = self._masters.get(session, lottery_id)
        if master is None or not books:
            raise NotFoundError("Lottery inventory not found")
        return {"lottery": master, "books": books}

    def store_summary(
        self,
        session: Session,
        store_id: int,
        user: AuthUser | None,
        *,
        recent_limit: int = 20,
        sales_days: int = 30,
    ) -> dict[str, Any]:
        """Inventory totals, revenue per game, recent scans and daily sales.

        Sold tickets are ``total_count - remaining_tickets`` per book, so the
        figures agree with the scan responses and the inventory listing.
        """

        store = self._store_access.authorize(session, store_id, user)

        summary = {
            "total_books": 0,
            "total_tickets": 0,
            "sold_tickets": 0,
            "remaining_tickets": 0,
            "total_revenue": Decimal("0.00"),
        }
        by_lottery: dict[int, dict[str, Any]] = {}
        for book in self._books(session, store_id):
            sold = book["total_count"] - book["remaining_tickets"]
            revenue = _money(Decimal(sold) * Decimal(str(book["price"])))

            summary["total_books"] += 1
            summary["total_tickets"] += book["total_count"]
            summary["sold_tickets"] += sold
            summary["remaining_tickets"] += book["remaining_tickets"]
            summary["total_revenue"] += revenue

            game = by_lottery.setdefault(
                book["lottery_id"],
                {
                    "lottery_id": book["lottery_id"],
                    "lottery_name": book["lottery_name"],
                    "lottery_number": book["lottery_number"],
                    "price": book["price"],
                    "books": 0,
                    "tickets_sold": 0,
                    "remaining_tickets": 0,
                    "revenue": Decimal("0.00"),
                },
            )
            game["books"] += 1
            game["tickets_sold"] += sold
            game["remaining_tickets"] += book["remaining_tickets"]
            game["revenue"] += revenue

        today = self._today()
        sales_by_date = [
            {
                "report_date": row.report_date,
                "tickets_sold": int(row.tickets_sold or 0),
                "revenue": _money(row.revenue),
            }
            for row in self._daily.daily_totals(session, store_id, today - timedelta(days=sales_days - 1), today)
        ]
        sales_by_date.reverse()

        return {
            "store": store,
            "summary": summary,
            "revenue_by_lottery": sorted(by_lottery.values(), key=lambda g: g["revenue"], reverse=True),
            "recent_scans": self._history_rows(session, store_id, limit=recent_limit),
            "sales_by_date": sales_by_date,
        }

    def _history_rows(
        self, session: Session, store_id: int, *, limit: int, on_date: date | None = None
    ) -> list[dict[str, Any]]:
        history = []
        for entry, lottery_name, lottery_number, price in self._scan_logs.list_recent(
            session, store_id, limit=limit, on_date=on_date
        ):
            history.append(
                {
                    "id": entry.id,
                    "store_id": entry.store_id,
                    "barcode_data": entry.barcode_data,
                    "lottery_id": entry.lottery_id,
                    "lottery_name": lottery_name,
                    "lottery_number": lottery_number,
                    "lottery_price": price,
                    "ticket_number": entry.ticket_number,
                    "scanned_by": entry.scanned_by,
                    "scanned_at": entry.scanned_at,
                }
            )
        return history

    def _books(self, session: Session, store_id: int, *, lottery_id: int | None = None) -> list[dict[str, Any]]:
        books = []
        for book, lottery_number, lottery_name, price, start_number, end_number in self._inventory.list_for_store(
            session, store_id, lottery_id=lottery_id
        ):
            ticket_range = TicketRange(start_number, end_number)
            books.append(
                {
                    "id": book.id,
                    "store_id": book.store_id,
                    "lottery_id": book.lottery_id,
                    "lottery_number": lottery_number,
                    "lottery_name": lottery_name,
                    "price": price,
                    "serial_number": book.serial_number,
                    "total_count": book.total_count,
                    "current_count": book.current_count,
                    "direction": book.direction,
                    "status": book.status,
                    "remaining_tickets": remaining_tickets(book.current_count, book.direction, ticket_range),
                    "updated_at": book.updated_at,
                }
            )
        return books
