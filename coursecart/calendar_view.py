"""
Weekly calendar projection of the selected sections.

Each eligible section becomes one recurring event per weekday letter.
A section is eligible if it has days and a time, does not conflict with
another selected section, and its term falls in the chosen scope.
"""

from __future__ import annotations

import enum
from typing import Iterator, Optional, Sequence, Tuple

from coursecart.conflicts import parse_clock
from coursecart.model import CalendarEvent, SelectedSection


DAY_ORDINALS = {"M": 1, "T": 2, "W": 3, "R": 4, "F": 5}

TERM_COLORS = {"Full": "#3788d8", "Q1": "#4caf50", "Q2": "#ff9800"}
DEFAULT_COLOR = "#808080"


class TermScope(enum.Enum):
    OVERALL = "Overall"
    Q1 = "Q1"
    Q2 = "Q2"

    @property
    def terms(self) -> Tuple[str, ...]:
        if self is TermScope.Q1:
            return ("Full", "Q1")
        if self is TermScope.Q2:
            return ("Full", "Q2")
        return ("Full", "Q1", "Q2")

    @classmethod
    def parse(cls, text: str) -> "TermScope":
        for scope in cls:
            if scope.value.lower() == (text or "").strip().lower():
                return scope
        raise ValueError(f"Unknown calendar scope: {text!r} (expected Overall, Q1 or Q2)")


def to_24h(text: str) -> Optional[str]:
    """
    '1:05pm' -> '13:05:00'. None if the text is not a time.
    """
    clock = parse_clock(text)
    if clock is None:
        return None
    return f"{clock[0]:02d}:{clock[1]:02d}:00"


def _events_for(item: SelectedSection) -> Iterator[CalendarEvent]:
    start_text, _, end_text = (item.time or "").partition("-")
    start = to_24h(start_text)
    end = to_24h(end_text)
    if start is None or end is None:
        return

    color = TERM_COLORS.get(item.term or "", DEFAULT_COLOR)
    for letter in item.days or "":
        ordinal = DAY_ORDINALS.get(letter)
        if ordinal is None:
            # weekend letters are not scheduled
            continue
        yield CalendarEvent(
            title=item.course_code,
            days_of_week=(ordinal,),
            start_time=start,
            end_time=end,
            color=color,
            term=item.term,
        )


class CalendarProjection:
    """
    Lazy sequence of calendar events. Iterating again starts over.
    """

    def __init__(self, selected: Sequence[SelectedSection], scope: TermScope = TermScope.OVERALL) -> None:
        self.selected = selected
        self.scope = scope

    def is_eligible(self, item: SelectedSection) -> bool:
        return bool(item.time and item.days) and not item.is_conflicting and item.term in self.scope.terms

    def __iter__(self) -> Iterator[CalendarEvent]:
        for item in self.selected:
            if self.is_eligible(item):
                yield from _events_for(item)


def project_events(selected: Sequence[SelectedSection], scope: TermScope = TermScope.OVERALL) -> CalendarProjection:
    return CalendarProjection(selected, scope)
