"""Repository layer for the append-only scan log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from sqlalchemy import Row, select
from sqlalchemy.orm import Session

from lotto_pro.models.lottery_master import LotteryMaster
from lotto_pro.models.scanned_ticket import ScannedTicket


class ScanLogRepository:
    """Inserts and history reads. Log rows are never updated."""

    def create(
        self,
        session: Session,
        *,
        store_id: int,
        barcode_data: str,
        lottery_id: int,
        ticket_number: int,
        scanned_by: int | None,
        scanned_at: datetime | None = None,
    ) -> ScannedTicket:
        entry = ScannedTicket(
            store_id=store_id,
            barcode_data=barcode_data,
            lottery_id=lottery_id,
            ticket_number=ticket_number,
            scanned_by=scanned_by,
        )
        if scanned_at is not None:
            entry.scanned_at = scanned_at
        session.add(entry)
        session.flush()
        return entry

    def list_recent(
        self,
        session: Session,
        store_id: int,
        *,
        limit: int,
        on_date: date | None = None,
    ) -> Sequence[Row]:
        """Newest scans first, joined with the game name and price."""

        stmt = (
            select(
                ScannedTicket,
                LotteryMaster.lottery_name,
                LotteryMaster.lottery_number,
                LotteryMaster.price,
            )
            .outerjoin(LotteryMaster, ScannedTicket.lottery_id == LotteryMaster.lottery_id)
            .where(ScannedTicket.store_id == store_id)
        )
        if on_date is not None:
            day_start = datetime.combine(on_date, time.min)
            stmt = stmt.where(
                ScannedTicket.scanned_at >= day_start,
                ScannedTicket.scanned_at < day_start + timedelta(days=1),
            )

        stmt = stmt.order_by(ScannedTicket.scanned_at.desc(), ScannedTicket.id.desc()).limit(limit)
        return session.execute(stmt).all()
