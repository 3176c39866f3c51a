"""Scan use-case: parse, reconcile the book, then log and report.

The book update is authoritative and commits on its own. The scan log and the
daily report run afterwards in separate transactions, so neither can undo or
block an inventory change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from lotto_pro.auth import AuthUser
from lotto_pro.models.enums import Direction, GameStatus
from lotto_pro.models.inventory import StoreLotteryInventory
from lotto_pro.models.lottery_master import LotteryMaster
from lotto_pro.repositories.inventory_repository import InventoryRepository
from lotto_pro.repositories.lottery_master_repository import LotteryMasterRepository
from lotto_pro.services.barcode_parser import ParsedScan, parse_direction, parse_scan_input
from lotto_pro.services.daily_report_accumulator import DailyReportAccumulator
from lotto_pro.services.inventory_engine import (
    BookSnapshot,
    Reconciliation,
    TicketRange,
    check_in_range,
    reconcile,
)
from lotto_pro.services.scan_log_service import ScanLogService
from lotto_pro.services.store_access import StoreAccessService

logger = logging.getLogger(__name__)

REASON_NOT_FOUND = "not_found"
REASON_INACTIVE = "inactive_in_master"


@dataclass(frozen=True)
class ScanOutcome:
    """Result of one scan.

    ``game_active`` False means the game is unknown or inactive in the catalog
    and nothing was written; ``reason`` says which.
    """

    game_active: bool
    lottery_number: str
    reason: str | None = None
    master: LotteryMaster | None = None
    book: StoreLotteryInventory | None = None
    reconciliation: Reconciliation | None = None
    scan_id: int | None = None


class ScanService:
    """Ticket scan use-cases."""

    def __init__(
        self,
        *,
        masters: LotteryMasterRepository | None = None,
        inventory: InventoryRepository | None = None,
        store_access: StoreAccessService | None = None,
        scan_log: ScanLogService | None = None,
        reports: DailyReportAccumulator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._masters = masters or LotteryMasterRepository()
        self._inventory = inventory or InventoryRepository()
        self._store_access = store_access or StoreAccessService()
        self._scan_log = scan_log or ScanLogService()
        self._reports = reports or DailyReportAccumulator()
        self._clock = clock

    def scan(self, session: Session, store_id: int, payload: Mapping[str, Any], user: AuthUser | None) -> ScanOutcome:
        self._store_access.authorize(session, store_id, user)

        parsed = parse_scan_input(payload)
        requested_direction = parse_direction(payload.get("direction"))

        master = self._masters.get_by_number(session, parsed.lottery_number)
        if master is None:
            return ScanOutcome(game_active=False, lottery_number=parsed.lottery_number, reason=REASON_NOT_FOUND)
        if master.status is not GameStatus.ACTIVE:
            return ScanOutcome(game_active=False, lottery_number=parsed.lottery_number, reason=REASON_INACTIVE)

        ticket_range = TicketRange(master.start_number, master.end_number)
        check_in_range(parsed.ticket_number, ticket_range)

        try:
            book, result = self._apply_to_book(session, store_id, master, parsed, ticket_range, requested_direction)
            session.commit()
        except Exception:
            # Release the row lock before the error handler runs.
            session.rollback()
            raise

        logger.info(
            "Scanned %s at store %s: book %s now at %s (%s sold this scan)",
            parsed.raw,
            store_id,
            book.id,
            result.current_count,
            result.tickets_sold_this_scan,
        )

        # One clock for the log timestamp and the report day.
        scanned_at = self._clock()
        scan_id = self._scan_log.record(
            session,
            store_id=store_id,
            barcode_data=parsed.raw,
            lottery_id=master.lottery_id,
            ticket_number=parsed.ticket_number,
            scanned_by=user.id if user is not None else None,
            scanned_at=scanned_at,
        )
        self._reports.accumulate(
            session,
            store_id=store_id,
            lottery_id=master.lottery_id,
            book_id=book.id,
            tickets_sold=result.tickets_sold_this_scan,
            price=master.price,
            scan_id=scan_id,
            report_date=scanned_at.date(),
        )

        return ScanOutcome(
            game_active=True,
            lottery_number=master.lottery_number,
            master=master,
            book=book,
            reconciliation=result,
            scan_id=scan_id,
        )

    def _apply_to_book(
        self,
        session: Session,
        store_id: int,
        master: LotteryMaster,
        parsed: ParsedScan,
        ticket_range: TicketRange,
        requested_direction: Direction | None,
    ) -> tuple[StoreLotteryInventory, Reconciliation]:
        book = self._inventory.get_book_for_update(
            session,
            store_id=store_id,
            lottery_id=master.lottery_id,
            serial_number=parsed.ticket_serial,
        )
        snapshot = None
        if book is not None:
            snapshot = BookSnapshot(current_count=book.current_count, direction=book.direction)

        result = reconcile(ticket_range, parsed.ticket_number, requested_direction, snapshot)

        if book is None:
            book = self._inventory.create(
                session,
                store_id=store_id,
                lottery_id=master.lottery_id,
                serial_number=parsed.ticket_serial,
                total_count=result.total_count,
                current_count=result.current_count,
                direction=result.direction,
                status=result.status,
            )
        else:
            self._inventory.update(
                session,
                book,
                total_count=result.total_count,
                current_count=result.current_count,
                direction=result.direction,
                status=result.status,
            )
        return book, result
