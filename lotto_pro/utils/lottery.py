"""Lottery code helpers."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")


def normalize_lottery_number(value: str) -> str:
    """Canonical catalog code: digits only, left-padded to three.

    Values without any digit are returned stripped.
    """

    if not value:
        return value
    digits = _NON_DIGITS.sub("", value)
    if not digits:
        return value.strip()
    return digits.zfill(3)
