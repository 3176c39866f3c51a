"""Store lottery inventory ("book") ORM model."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lotto_pro.models.base import Base, TimestampMixin
from lotto_pro.models.enums import BookStatus, Direction, enum_column_type


class StoreLotteryInventory(TimestampMixin, Base):
    """One physical book of a game at a store.

    ``current_count`` is the last observed ticket number, not a remaining
    count. Remaining tickets are always derived from it and the direction.
    """

    __tablename__ = "store_lottery_inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.store_id"), nullable=False, index=True)
    lottery_id: Mapped[int] = mapped_column(ForeignKey("lottery_master.lottery_id"), nullable=False)
    serial_number: Mapped[str] = mapped_column(String(32), nullable=False)

    total_count: Mapped[int] = mapped_column(Integer, nullable=False)
    current_count: Mapped[int] = mapped_column(Integer, nullable=False)

    direction: Mapped[Direction] = mapped_column(
        enum_column_type(Direction), nullable=False, default=Direction.UNKNOWN
    )
    status: Mapped[BookStatus] = mapped_column(
        enum_column_type(BookStatus), nullable=False, default=BookStatus.INACTIVE
    )

    __table_args__ = (
        UniqueConstraint("store_id", "lottery_id", "serial_number", name="uq_inventory_book"),
    )

    def __repr__(self) -> str:
        return (
            f"<StoreLotteryInventory id={self.id} serial={self.serial_number} "
            f"current={self.current_count} direction={self.direction}>"
        )
