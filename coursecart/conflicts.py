"""
Conflict detection.

Given the selected sections, detect pairs that meet on a common day at
overlapping times.
Overlap rule:
    start < other_end AND other_start < end
Touching endpoints (10:00am-11:00am vs 11:00am-12:00pm) do not conflict.
"""

from __future__ import annotations

import re
from typing import List, Optional, Protocol, Sequence, Tuple

from coursecart.model import Course, SelectedSection, Selection


_ENDPOINT_RE = re.compile(r"(\d+):(\d+)(\w+)")


class Meeting(Protocol):
    days: Optional[str]
    time: Optional[str]


def parse_clock(text: str) -> Optional[Tuple[int, int]]:
    """
    Convert a 12-hour endpoint like '1:30pm' to (hours, minutes) on a 24-hour clock.
    Returns None if the text does not look like a time.
    """
    match = _ENDPOINT_RE.search(text or "")
    if not match:
        return None
    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3).lower()
    if period.startswith("p") and hours != 12:
        hours += 12
    if period.startswith("a") and hours == 12:
        hours = 0
    return hours, minutes


def _to_minutes(text: str) -> int:
    clock = parse_clock(text)
    if clock is None:
        return 0
    return clock[0] * 60 + clock[1]


def parse_time_range(text: Optional[str]) -> Tuple[int, int]:
    """
    Parse '9:00am-10:15am' into minutes since midnight: (540, 615).
    Missing or malformed ranges give (0, 0), which never overlaps anything.
    """
    if not text or "-" not in text:
        return 0, 0
    parts = text.split("-")
    return _to_minutes(parts[0]), _to_minutes(parts[1])


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def _day_letters(days: str) -> set:
    return {ch for ch in days if ch.isalpha()}


def has_conflict(a: Meeting, b: Meeting) -> bool:
    """
    True if both sections meet on at least one common day at overlapping times.
    Sections without days or time cannot conflict.
    """
    if not a.days or not a.time or not b.days or not b.time:
        return False
    if not _day_letters(a.days) & _day_letters(b.days):
        return False
    a_start, a_end = parse_time_range(a.time)
    b_start, b_end = parse_time_range(b.time)
    return _overlaps(a_start, a_end, b_start, b_end)


def find_conflicts(sections: Sequence[Meeting]) -> List[Tuple[int, int]]:
    """
    Index pairs (i, j), i < j, of conflicting sections. Every pair is checked.
    """
    conflicts: List[Tuple[int, int]] = []

    # O(n^2) is fine for a student's selection
    for i in range(len(sections)):
        for j in range(i + 1, len(sections)):
            if has_conflict(sections[i], sections[j]):
                conflicts.append((i, j))

    return conflicts


def selected_sections(courses: Sequence[Course], selection: Selection) -> List[SelectedSection]:
    """
    Build the selection list of the calculator, in catalog order.

    Session ids are only unique within a course, so a checked id picks up
    every section carrying it. Both members of a conflicting pair are flagged.
    """
    picked: List[SelectedSection] = []
    for course in courses:
        for section in course.sections:
            if selection.get(section.session_id):
                picked.append(
                    SelectedSection(section=section, course_code=course.code, price=course.average_price)
                )

    conflicting = set()
    for i, j in find_conflicts([p.section for p in picked]):
        conflicting.add(i)
        conflicting.add(j)

    return [
        SelectedSection(
            section=p.section,
            course_code=p.course_code,
            price=p.price,
            is_conflicting=i in conflicting,
        )
        for i, p in enumerate(picked)
    ]
