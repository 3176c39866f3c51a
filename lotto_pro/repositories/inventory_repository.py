"""Repository layer for book (store lottery inventory) persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import Row, select
from sqlalchemy.orm import Session

from lotto_pro.models.enums import BookStatus, Direction
from lotto_pro.models.inventory import StoreLotteryInventory
from lotto_pro.models.lottery_master import LotteryMaster


class InventoryRepository:
    """Book lookups and writes."""

    def get_book_for_update(
        self,
        session: Session,
        *,
        store_id: int,
        lottery_id: int,
        serial_number: str,
    ) -> StoreLotteryInventory | None:
        """Load a book and lock its row until the transaction ends."""

        stmt = (
            select(StoreLotteryInventory)
            .where(
                StoreLotteryInventory.store_id == store_id,
                StoreLotteryInventory.lottery_id == lottery_id,
                StoreLotteryInventory.serial_number == serial_number,
            )
            .with_for_update()
        )
        return session.scalars(stmt).first()

    def create(
        self,
        session: Session,
        *,
        store_id: int,
        lottery_id: int,
        serial_number: str,
        total_count: int,
        current_count: int,
        direction: Direction,
        status: BookStatus,
    ) -> StoreLotteryInventory:
        book = StoreLotteryInventory(
            store_id=store_id,
            lottery_id=lottery_id,
            serial_number=serial_number,
            total_count=total_count,
            current_count=current_count,
            direction=direction,
            status=status,
        )
        session.add(book)
        session.flush()  # assign PK
        return book

    def update(
        self,
        session: Session,
        book: StoreLotteryInventory,
        *,
        total_count: int,
        current_count: int,
        direction: Direction,
        status: BookStatus,
    ) -> StoreLotteryInventory:
        book.total_count = total_count
        book.current_count = current_count
        book.direction = direction
        book.status = status
        session.flush()
        return book

    def list_for_store(self, session: Session, store_id: int, *, lottery_id: int | None = None) -> Sequence[Row]:
        """Books of a store with the game fields needed to derive remaining tickets.

        ``lottery_id`` narrows the list to the books of one game.
        """

        stmt = (
            select(
                StoreLotteryInventory,
                LotteryMaster.lottery_number,
                LotteryMaster.lottery_name,
                LotteryMaster.price,
                LotteryMaster.start_number,
                LotteryMaster.end_number,
            )
            .join(LotteryMaster, StoreLotteryInventory.lottery_id == LotteryMaster.lottery_id)
            .where(StoreLotteryInventory.store_id == store_id)
            .order_by(StoreLotteryInventory.updated_at.desc(), StoreLotteryInventory.id.desc())
        )
        if lottery_id is not None:
            stmt = stmt.where(StoreLotteryInventory.lottery_id == lottery_id)
        return session.execute(stmt).all()
