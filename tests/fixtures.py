"""
Small in-memory listing/price rows shared by the tests.

Columns follow the course listing export (one row per section x instructor).
"""

from __future__ import annotations

from typing import Any, Optional

from coursecart.model import Course, Instructor, Section


def listing_row(
    course_id: Any,
    section_id: Any = None,
    title: str = "Course",
    days: Optional[str] = "MW",
    time: Optional[str] = "10:15am-11:45am",
    term: Optional[str] = "Full",
    cu: Any = 1,
    instructor: Optional[str] = "Smith, John",
    **extra: Any,
) -> dict[str, Any]:
    row = {
        "Course_ID": course_id,
        "Title": title,
        "Section_ID": section_id,
        "Meetings_Days": days,
        "Meetings_Time": time,
        "Term": term,
        "CU": cu,
        "Instructor": instructor,
    }
    row.update(extra)
    return row


LISTING_ROWS = [
    listing_row(
        "ACCT 1010",
        "ACCT1010001",
        title="Accounting",
        term="Q1",
        cu=0.5,
        base_course_quality="3.2",
        base_instructor_quality="",
        base_difficulty=0,
        base_work_required="0",
        review_rCourseQuality="3.5",
    ),
    # co-taught: same section, second instructor row
    listing_row("ACCT1010", "ACCT1010001", title="Ignored title", term="Q1", cu=0.5, instructor="Jane Doe"),
    listing_row("acct-1010", "ACCT1010002", days="TR", time="1:45pm-3:15pm", term="Q2", cu=0.5),
    listing_row("", "XXXX0000001"),
    listing_row(None, "XXXX0000002"),
    listing_row("FNCE-6110", None, title="Corporate Finance"),
]

PRICE_ROWS = [
    {"Course_ID": "ACCT1010", "Average_Price": "1234.5"},
    {"Course_ID": "FNCE 6110", "Average_Price": "n/a"},
]


def section(
    session_id: str,
    days: Optional[str] = "MW",
    time: Optional[str] = "10:00am-11:00am",
    term: Optional[str] = "Full",
    credits: Any = 1,
    instructors: tuple[Instructor, ...] = (),
) -> Section:
    meetings = f"{days or ''} {time or ''}".strip()
    return Section(
        session_id=session_id,
        days=days,
        time=time,
        term=term,
        credits=credits,
        meetings=meetings,
        instructors=instructors,
    )


def course(code: str, title: str = "Course", price: float = 0, sections: tuple[Section, ...] = (), **kw: Any) -> Course:
    return Course(code=code, title=title, average_price=price, sections=sections, **kw)
