"""
Catalog views: filter vocabularies, filtering, searching and sorting.

All functions are pure. They take the current catalog and user state and
return new lists; the input sequences are never reordered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from coursecart.model import SORT_KEYS, Course, FilterState, Section, SortState
from coursecart.normalize import as_text


@dataclass(frozen=True)
class FilterOptions:
    depts: Tuple[str, ...] = ()
    days: Tuple[str, ...] = ()
    times: Tuple[str, ...] = ()
    terms: Tuple[str, ...] = ()
    credits: Tuple[str, ...] = ()


def credit_text(credits: Any) -> str:
    """
    Stringified credits value, as compared against the credits filter.
    """
    if credits is None:
        return ""
    return as_text(credits)


_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _is_number(text: str) -> bool:
    return _NUMBER_RE.fullmatch(text) is not None


def _sorted_credits(values: Iterable[str]) -> Tuple[str, ...]:
    lexical = sorted(set(values))
    if all(_is_number(v) for v in lexical):
        return tuple(sorted(lexical, key=float))
    return tuple(lexical)


def filter_options(courses: Sequence[Course]) -> FilterOptions:
    """
    Distinct non-empty values per filter, sorted for display.
    """
    sections = [s for c in courses for s in c.sections]
    return FilterOptions(
        depts=tuple(sorted({c.department for c in courses if c.department})),
        days=tuple(sorted({s.days for s in sections if s.days})),
        times=tuple(sorted({s.time for s in sections if s.time})),
        terms=tuple(sorted({s.term for s in sections if s.term})),
        credits=_sorted_credits(credit_text(s.credits) for s in sections if credit_text(s.credits)),
    )


def section_matches_filters(section: Section, filters: FilterState) -> bool:
    """
    True if the section satisfies the day/time/term/credits filters.
    """
    return (
        (not filters.day or section.days == filters.day)
        and (not filters.time or section.time == filters.time)
        and (not filters.term or section.term == filters.term)
        and (not filters.credits or credit_text(section.credits) == filters.credits)
    )


def _matches_search(course: Course, query: str) -> bool:
    if not query:
        return True
    return query in course.code.lower() or query in course.title.lower()


def apply_filters(
    courses: Sequence[Course],
    filters: FilterState,
    search_query: str = "",
) -> List[Course]:
    """
    Courses passing the search query and every non-empty filter.

    Section filters are checked independently: a course passes the day filter
    if any section has that day, and the term filter if any (possibly other)
    section has that term.
    """
    query = (search_query or "").lower()
    out: List[Course] = []
    for c in courses:
        if not _matches_search(c, query):
            continue
        if filters.dept and not c.code.startswith(filters.dept):
            continue
        if filters.day and not any(s.days == filters.day for s in c.sections):
            continue
        if filters.time and not any(s.time == filters.time for s in c.sections):
            continue
        if filters.term and not any(s.term == filters.term for s in c.sections):
            continue
        if filters.credits and not any(credit_text(s.credits) == filters.credits for s in c.sections):
            continue
        out.append(c)
    return out


def _sort_value(course: Course, key: str) -> Tuple[Any, ...]:
    value = getattr(course, key)
    # absent ratings sort before any real value
    if value is None:
        return (0,)
    return (1, value)


def sort_courses(courses: Sequence[Course], key: str = "code", direction: str = "ascending") -> List[Course]:
    """
    Stable sort by one course field. Ties keep their input order.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key!r}")
    return sorted(courses, key=lambda c: _sort_value(c, key), reverse=direction == "descending")


def next_sort_state(current: SortState, key: str) -> SortState:
    """
    Clicking the active column flips the direction, any other column starts ascending.
    """
    if current.key == key and current.direction == "ascending":
        return SortState(key=key, direction="descending")
    return SortState(key=key, direction="ascending")


def is_code_visible(code: Optional[str], filtered_courses: Iterable[Course]) -> bool:
    if not code:
        return False
    return any(c.code == code for c in filtered_courses)


def find_course(courses: Iterable[Course], code: Optional[str]) -> Optional[Course]:
    if not code:
        return None
    for c in courses:
        if c.code == code:
            return c
    return None
