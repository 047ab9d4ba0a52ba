"""
Price total of the selected sections.

Conflicting sections stay in the selection list but do not count.
"""

from __future__ import annotations

import math
from typing import Iterable

from coursecart.model import SelectedSection


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def total_price(selected: Iterable[SelectedSection]) -> float:
    return sum((s.price for s in selected if not s.is_conflicting), 0.0)


def display_total(selected: Iterable[SelectedSection]) -> int:
    return _round_half_up(total_price(selected))


def format_price(value: float) -> str:
    """
    Whole-number price with thousands separators: 1234.5 -> '1,235'.
    """
    return f"{_round_half_up(value):,}"
