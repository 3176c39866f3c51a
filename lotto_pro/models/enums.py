"""Closed value sets stored as text columns."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum


class Direction(str, Enum):
    """Order in which a book's tickets are sold."""

    UNKNOWN = "unknown"
    ASC = "asc"
    DESC = "desc"


class BookStatus(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    FINISHED = "finished"


class GameStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def enum_column_type(enum_cls: type[Enum]) -> SAEnum:
    """Store an enum by value, rejecting unknown strings at the storage boundary."""

    return SAEnum(
        enum_cls,
        native_enum=False,
        length=16,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )
