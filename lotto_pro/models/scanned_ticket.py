"""Scan log ORM model (append-only)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from lotto_pro.models.base import Base


class ScannedTicket(Base):
    """One row per scan that reached the logging step."""

    __tablename__ = "scanned_tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.store_id"), nullable=False, index=True)
    barcode_data: Mapped[str] = mapped_column(String(128), nullable=False)
    lottery_id: Mapped[int] = mapped_column(ForeignKey("lottery_master.lottery_id"), nullable=False)
    ticket_number: Mapped[int] = mapped_column(Integer, nullable=False)
    # Owner id or store-account id, depending on who scanned.
    scanned_by: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    scanned_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ScannedTicket id={self.id} store={self.store_id} barcode={self.barcode_data}>"
