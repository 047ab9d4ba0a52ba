"""
Central data model definitions used across the project.

This module defines the canonical structure of the catalog records so that:
- the catalog builder, the view functions and the schedule calculator share the same field names
- records built for one data load are never mutated afterwards (frozen dataclasses)
- user state (filters, sort, selection) is passed around explicitly
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple, Union


Credits = Union[str, int, float, None]

# session_id -> checked; a missing key means "not selected"
Selection = Mapping[str, bool]

FILTER_FIELDS = ("dept", "day", "time", "term", "credits")

SORT_KEYS = (
    "code",
    "title",
    "average_price",
    "terms",
    "credits",
    "course_rating",
    "instructor_rating",
    "difficulty_rating",
    "work_rating",
)


@dataclass(frozen=True)
class Instructor:
    """
    One instructor row of a section, with the reviews for that instructor.
    """

    name: str
    course_quality: Optional[float] = None
    instructor_quality: Optional[float] = None
    difficulty: Optional[float] = None
    work_required: Optional[float] = None


@dataclass(frozen=True)
class Section:
    """
    One scheduled section of a course.

    session_id is only unique within its course.
    """

    session_id: str
    days: Optional[str]
    time: Optional[str]
    term: Optional[str]
    credits: Credits
    meetings: str
    instructors: Tuple[Instructor, ...] = ()

    @property
    def session_label(self) -> str:
        return str(self.session_id)[-3:]

    @property
    def instructor_text(self) -> str:
        if len(self.instructors) > 1:
            return "Multiple Instructors"
        if len(self.instructors) == 1:
            return self.instructors[0].name
        return "N/A"


@dataclass(frozen=True)
class Course:
    """
    One catalog entry, keyed by its canonical DEPT-NNNN code.
    """

    code: str
    title: str
    course_rating: Optional[float] = None
    instructor_rating: Optional[float] = None
    difficulty_rating: Optional[float] = None
    work_rating: Optional[float] = None
    average_price: float = 0
    terms: str = ""
    credits: str = ""
    sections: Tuple[Section, ...] = ()

    @property
    def department(self) -> str:
        return self.code[:4]


@dataclass(frozen=True)
class FilterState:
    dept: str = ""
    day: str = ""
    time: str = ""
    term: str = ""
    credits: str = ""


@dataclass(frozen=True)
class SortState:
    key: str = "code"
    direction: str = "ascending"

    @property
    def descending(self) -> bool:
        return self.direction == "descending"


@dataclass(frozen=True)
class SelectedSection:
    """
    A section as it appears in the selection list of the calculator.
    """

    section: Section
    course_code: str
    price: float
    is_conflicting: bool = False

    @property
    def session_id(self) -> str:
        return self.section.session_id

    @property
    def days(self) -> Optional[str]:
        return self.section.days

    @property
    def time(self) -> Optional[str]:
        return self.section.time

    @property
    def term(self) -> Optional[str]:
        return self.section.term

    @property
    def meetings(self) -> str:
        return self.section.meetings

    @property
    def instructor(self) -> str:
        return self.section.instructor_text

    @property
    def struck_through(self) -> bool:
        # conflicting sections stay listed but their price does not count
        return self.is_conflicting


@dataclass(frozen=True)
class CalendarEvent:
    """
    One weekly recurring block of the calendar view.

    start_time/end_time are 24-hour 'HH:MM:00' strings.
    """

    title: str
    days_of_week: Tuple[int, ...]
    start_time: str
    end_time: str
    color: str
    term: Optional[str] = None
    all_day: bool = field(default=False)
