"""
Catalog building (rows -> Course/Section/Instructor records).

The listing has one row per section x instructor. Rows are grouped by
canonical course code, then by section id, and frozen into Course records.

Rules:
- a row whose code normalizes to '' is dropped
- course fields (title, ratings, price) come from the first row of the course
- every row with a section id adds one instructor entry (co-taught sections get several)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from coursecart.model import Course, Credits, Instructor, Section
from coursecart.normalize import (
    as_text,
    normalize_code,
    parse_price,
    parse_rating,
    resolve_last_name,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Builders (mutable while rows are consumed, frozen by finalize())
# ---------------------------------------------------------------------------


@dataclass
class _SectionBuilder:
    session_id: str
    days: Optional[str]
    time: Optional[str]
    term: Optional[str]
    credits: Credits
    instructors: List[Instructor] = field(default_factory=list)

    def finalize(self) -> Section:
        meetings = f"{self.days or ''} {self.time or ''}".strip()
        return Section(
            session_id=self.session_id,
            days=self.days,
            time=self.time,
            term=self.term,
            credits=self.credits,
            meetings=meetings,
            instructors=tuple(self.instructors),
        )


@dataclass
class _CourseBuilder:
    code: str
    title: str
    course_rating: Optional[float]
    instructor_rating: Optional[float]
    difficulty_rating: Optional[float]
    work_rating: Optional[float]
    average_price: float
    # dicts keep insertion order, which is the first-seen order of sections
    sections: Dict[str, _SectionBuilder] = field(default_factory=dict)

    def finalize(self) -> Course:
        sections = tuple(s.finalize() for s in self.sections.values())
        return Course(
            code=self.code,
            title=self.title,
            course_rating=self.course_rating,
            instructor_rating=self.instructor_rating,
            difficulty_rating=self.difficulty_rating,
            work_rating=self.work_rating,
            average_price=self.average_price,
            terms=_join_distinct(s.term for s in sections if s.term),
            credits=_join_distinct(
                as_text(s.credits) for s in sections if s.credits is not None and s.credits != ""
            ),
            sections=sections,
        )


def _join_distinct(values: Iterable[str]) -> str:
    return ", ".join(dict.fromkeys(values))


def _text_or_none(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = as_text(raw)
    return text if text else None


# ---------------------------------------------------------------------------
# Row handling
# ---------------------------------------------------------------------------


def _new_course(code: str, row: Mapping[str, Any], price_by_code: Mapping[str, float]) -> _CourseBuilder:
    title = row.get("Title")
    return _CourseBuilder(
        code=code,
        title="" if title is None else str(title),
        course_rating=parse_rating(row.get("base_course_quality")),
        instructor_rating=parse_rating(row.get("base_instructor_quality")),
        difficulty_rating=parse_rating(row.get("base_difficulty")),
        work_rating=parse_rating(row.get("base_work_required")),
        average_price=price_by_code.get(code) or 0,
    )


def _new_section(session_id: str, row: Mapping[str, Any]) -> _SectionBuilder:
    return _SectionBuilder(
        session_id=session_id,
        days=_text_or_none(row.get("Meetings_Days")),
        time=_text_or_none(row.get("Meetings_Time")),
        term=_text_or_none(row.get("Term")),
        credits=row.get("CU"),
    )


def _instructor_from_row(row: Mapping[str, Any]) -> Instructor:
    return Instructor(
        name=resolve_last_name(row.get("Instructor"), row.get("Instructor_last")),
        course_quality=parse_rating(row.get("review_rCourseQuality")),
        instructor_quality=parse_rating(row.get("review_rInstructorQuality")),
        difficulty=parse_rating(row.get("review_rDifficulty")),
        work_required=parse_rating(row.get("review_rWorkRequired")),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_price_map(price_rows: Iterable[Mapping[str, Any]]) -> Dict[str, float]:
    """
    Map canonical course code -> average price.

    Non-numeric prices become 0. Later rows win for duplicate codes.
    """
    prices: Dict[str, float] = {}
    for row in price_rows:
        code = normalize_code(row.get("Course_ID"))
        if code:
            prices[code] = parse_price(row.get("Average_Price"))
    return prices


def build_catalog(
    rows: Iterable[Mapping[str, Any]],
    price_by_code: Optional[Mapping[str, float]] = None,
) -> List[Course]:
    """
    Merge listing rows into Course records, in first-seen order of course codes.

    Never raises for a malformed row: rows without a usable code are skipped
    and missing optional fields are treated as absent.
    """
    prices = price_by_code or {}
    builders: Dict[str, _CourseBuilder] = {}
    dropped = 0

    for row in rows:
        code = normalize_code(row.get("Course_ID"))
        if not code:
            dropped += 1
            continue

        course = builders.get(code)
        if course is None:
            course = builders[code] = _new_course(code, row, prices)

        raw_session = row.get("Section_ID")
        if not raw_session:
            continue
        session_id = as_text(raw_session)

        section = course.sections.get(session_id)
        if section is None:
            section = course.sections[session_id] = _new_section(session_id, row)
        section.instructors.append(_instructor_from_row(row))

    if dropped:
        logger.debug("Dropped %d listing rows without a course code", dropped)

    return [b.finalize() for b in builders.values()]
