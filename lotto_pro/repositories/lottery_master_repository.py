"""Read access to the lottery master catalog."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from lotto_pro.models.lottery_master import LotteryMaster
from lotto_pro.utils.lottery import normalize_lottery_number


class LotteryMasterRepository:
    """Catalog lookups used by the scan engine."""

    def get_by_number(self, session: Session, lottery_number: str) -> LotteryMaster | None:
        stmt = select(LotteryMaster).where(
            LotteryMaster.lottery_number == normalize_lottery_number(lottery_number)
        )
        return session.scalars(stmt).first()

    def get(self, session: Session, lottery_id: int) -> LotteryMaster | None:
        return session.get(LotteryMaster, lottery_id)
