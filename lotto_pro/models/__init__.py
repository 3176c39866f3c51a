"""ORM models."""

from lotto_pro.models.daily_report import DailyReport
from lotto_pro.models.enums import BookStatus, Direction, GameStatus
from lotto_pro.models.inventory import StoreLotteryInventory
from lotto_pro.models.lottery_master import LotteryMaster
from lotto_pro.models.scanned_ticket import ScannedTicket
from lotto_pro.models.store import Store, StoreOwner

__all__ = [
    "BookStatus",
    "DailyReport",
    "Direction",
    "GameStatus",
    "LotteryMaster",
    "ScannedTicket",
    "Store",
    "StoreLotteryInventory",
    "StoreOwner",
]
