"""Store lookups and the owner-account deletion fan-out."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lotto_pro.models.daily_report import DailyReport
from lotto_pro.models.inventory import StoreLotteryInventory
from lotto_pro.models.scanned_ticket import ScannedTicket
from lotto_pro.models.store import Store, StoreOwner


class StoreRepository:
    def get(self, session: Session, store_id: int) -> Store | None:
        return session.get(Store, store_id)

    def get_owned(self, session: Session, store_id: int, owner_id: int) -> Store | None:
        stmt = select(Store).where(Store.store_id == store_id, Store.owner_id == owner_id)
        return session.scalars(stmt).first()

    def store_ids_for_owner(self, session: Session, owner_id: int) -> list[int]:
        stmt = select(Store.store_id).where(Store.owner_id == owner_id)
        return list(session.scalars(stmt).all())

    def delete_owner_cascade(self, session: Session, owner_id: int) -> dict[str, int]:
        """Delete an owner and everything hanging off their stores.

        Runs inside the caller's transaction; children go before parents so
        foreign keys hold at every step. Returns deleted row counts per table.
        """

        store_ids = self.store_ids_for_owner(session, owner_id)
        counts = {"daily_report": 0, "store_lottery_inventory": 0, "scanned_tickets": 0, "stores": 0}

        if store_ids:
            counts["daily_report"] = session.execute(
                delete(DailyReport).where(DailyReport.store_id.in_(store_ids))
            ).rowcount
            counts["store_lottery_inventory"] = session.execute(
                delete(StoreLotteryInventory).where(StoreLotteryInventory.store_id.in_(store_ids))
            ).rowcount
            # scanned_by holds either an owner id or a store id, so scans are
            # matched by store only.
            counts["scanned_tickets"] = session.execute(
                delete(ScannedTicket).where(ScannedTicket.store_id.in_(store_ids))
            ).rowcount
            counts["stores"] = session.execute(
                delete(Store).where(Store.store_id.in_(store_ids), Store.owner_id == owner_id)
            ).rowcount

        session.execute(delete(StoreOwner).where(StoreOwner.owner_id == owner_id))
        return counts
