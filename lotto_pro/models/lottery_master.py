"""Lottery master catalog ORM model.

One row per scratch-off game. Owned by the catalog admin; the scan engine only
reads it.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lotto_pro.models.base import Base
from lotto_pro.models.enums import GameStatus, enum_column_type


class LotteryMaster(Base):
    """A lottery game definition."""

    __tablename__ = "lottery_master"

    lottery_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lottery_name: Mapped[str] = mapped_column(String(100), nullable=False)
    lottery_number: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Inclusive bounds; start may be greater than end.
    start_number: Mapped[int] = mapped_column(Integer, nullable=False)
    end_number: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[GameStatus] = mapped_column(
        enum_column_type(GameStatus), nullable=False, default=GameStatus.INACTIVE
    )
    launch_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<LotteryMaster number={self.lottery_number} status={self.status}>"
