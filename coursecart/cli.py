"""
CLI (Command Line Interface).

Terminal commands on top of the planner, e.g.:

    coursecart search finance --term Q1 --sort average_price
    coursecart options
    coursecart sections FNCE-6110
    coursecart add <session_id>
    coursecart remove <session_id>
    coursecart selected
    coursecart calendar --scope Q1
    coursecart export <file.ics>

Data file locations come from coursecart.config unless given as flags.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coursecart import config
from coursecart.calendar_view import TermScope
from coursecart.export_ics import export_events_to_ics
from coursecart.logging_config import LOG_LEVELS, setup_logging
from coursecart.model import FILTER_FIELDS, SORT_KEYS, Course, SortState
from coursecart.normalize import normalize_code
from coursecart.planner import Planner
from coursecart.pricing import format_price
from coursecart.storage import load_selection, save_selection
from coursecart.views import section_matches_filters

console = Console()

WEEKDAY_NAMES = {1: "Mon", 2: "Tue", 3: "Wed", 4: "Thu", 5: "Fri"}


def _rating(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else "N/A"


def _error(msg: str) -> None:
    print(msg, file=sys.stderr)


def _apply_filter_args(planner: Planner, args: argparse.Namespace) -> None:
    for name in FILTER_FIELDS:
        value = getattr(args, name, None)
        if value:
            planner.set_filter(name, value)


def _course_table(courses: list[Course], title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Code", style="bold cyan")
    table.add_column("Course")
    table.add_column("Price", justify="right")
    table.add_column("Term(s)")
    table.add_column("Credit(s)", justify="right")
    table.add_column("Course", justify="right")
    table.add_column("Instructor", justify="right")
    table.add_column("Difficulty", justify="right")
    table.add_column("Work", justify="right")
    for c in courses:
        table.add_row(
            escape(c.code),
            escape(c.title),
            f"${format_price(c.average_price)}",
            escape(c.terms),
            escape(c.credits),
            _rating(c.course_rating),
            _rating(c.instructor_rating),
            _rating(c.difficulty_rating),
            _rating(c.work_rating),
        )
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_search(args: argparse.Namespace, planner: Planner) -> int:
    """
    Search courses by code/title and the section filters.
    """
    _apply_filter_args(planner, args)
    planner.set_search((args.text or "").strip())
    planner.sort = SortState(key=args.sort, direction="descending" if args.desc else "ascending")

    matches = planner.sorted_courses
    if not matches:
        console.print("No courses match your filters.")
        return 0

    console.print(_course_table(matches[: args.limit], f"Courses ({len(matches)} found)"))
    if len(matches) > args.limit:
        console.print(f"... and {len(matches) - args.limit} more results")
    return 0


def _cmd_options(args: argparse.Namespace, planner: Planner) -> int:
    """
    Print the values accepted by each filter.
    """
    options = planner.options
    for label, values in (
        ("Departments", options.depts),
        ("Days", options.days),
        ("Times", options.times),
        ("Terms", options.terms),
        ("Credits", options.credits),
    ):
        console.print(f"[bold]{label}:[/] {escape(', '.join(values)) if values else '-'}")
    return 0


def _cmd_sections(args: argparse.Namespace, planner: Planner) -> int:
    """
    Show the sections of one course with per-instructor ratings.
    """
    _apply_filter_args(planner, args)
    code = normalize_code(args.code)
    planner.show_detail(code)
    course = planner.detail_course
    if course is None:
        _error(f"Unknown course: {args.code}")
        return 1

    if not course.sections:
        console.print("No sections found for this course.")
        return 0

    table = Table(title=f"Sections for {escape(course.code)}", box=box.SIMPLE)
    for col in ("Sel", "Section", "Session ID", "Meetings", "Term", "Instructor"):
        table.add_column(col)
    for col in ("Course", "Instructor", "Difficulty", "Work"):
        table.add_column(col, justify="right")

    for section in course.sections:
        style = None if section_matches_filters(section, planner.filters) else "dim"
        checked = "x" if planner.selection.get(section.session_id) else ""
        for index, instructor in enumerate(section.instructors):
            first = index == 0
            table.add_row(
                checked if first else "",
                escape(section.session_label) if first else "",
                escape(section.session_id) if first else "",
                escape(section.meetings) if first else "",
                escape(section.term or "") if first else "",
                escape(instructor.name),
                _rating(instructor.course_quality),
                _rating(instructor.instructor_quality),
                _rating(instructor.difficulty),
                _rating(instructor.work_required),
                style=style,
            )
    console.print(table)
    return 0


def _session_exists(planner: Planner, session_id: str) -> bool:
    return any(s.session_id == session_id for c in planner.courses for s in c.sections)


def _cmd_add(args: argparse.Namespace, planner: Planner) -> int:
    """
    Check a session in the persistent selection.
    """
    sid = (args.session_id or "").strip()
    if not sid:
        _error("Please provide a session id.")
        return 1

    if planner.selection.get(sid):
        console.print(f"Already selected: {escape(sid)}")
        return 0

    # allow adding unknown ids, but warn
    if not _session_exists(planner, sid):
        console.print(f"Warning: session '{escape(sid)}' not found in the course listing (adding anyway).")

    planner.toggle_session(sid)
    save_selection(planner.selection, args.selection)
    console.print(f"Added: {escape(sid)} (selected: {sum(planner.selection.values())})")
    return 0


def _cmd_remove(args: argparse.Namespace, planner: Planner) -> int:
    """
    Uncheck a session in the persistent selection.
    """
    sid = (args.session_id or "").strip()
    if not sid:
        _error("Please provide a session id.")
        return 1

    if not planner.selection.get(sid):
        console.print(f"Not selected: {escape(sid)}")
        return 0

    planner.toggle_session(sid)
    save_selection(planner.selection, args.selection)
    console.print(f"Removed: {escape(sid)} (selected: {sum(planner.selection.values())})")
    return 0


def _cmd_selected(args: argparse.Namespace, planner: Planner) -> int:
    """
    Print the selection list, conflicts marked, and the total price.
    """
    selected = planner.selected
    if not selected:
        console.print("No sections selected.")
        return 0

    table = Table(title="Selected Sections", box=box.SIMPLE)
    for col in ("Code", "Session ID", "Instructor(s)", "Meetings", "Term"):
        table.add_column(col)
    table.add_column("Price", justify="right")

    for s in selected:
        marker = "! " if s.is_conflicting else ""
        table.add_row(
            f"{marker}{escape(s.course_code)}",
            escape(s.session_id),
            escape(s.instructor),
            escape(s.meetings),
            escape(s.term or ""),
            f"[strike]${format_price(s.price)}[/]" if s.struck_through else f"${format_price(s.price)}",
            style="red" if s.is_conflicting else None,
        )
    console.print(table)
    console.print(f"Total (no conflicts): ${format_price(planner.total)}")
    return 0


def _cmd_calendar(args: argparse.Namespace, planner: Planner) -> int:
    """
    Print the weekly calendar for the chosen term scope.
    """
    planner.set_scope(args.scope)
    events = sorted(planner.events(), key=lambda ev: (ev.days_of_week, ev.start_time))
    if not events:
        console.print(f"No calendar events for scope {planner.scope.value}.")
        return 0

    table = Table(title=f"Weekly Schedule ({planner.scope.value})", box=box.SIMPLE)
    for col in ("Day", "Start", "End", "Course", "Term"):
        table.add_column(col)
    for ev in events:
        day = ", ".join(WEEKDAY_NAMES[d] for d in ev.days_of_week)
        table.add_row(
            day,
            ev.start_time[:5],
            ev.end_time[:5],
            f"[{ev.color}]{escape(ev.title)}[/]",
            escape(ev.term or ""),
        )
    console.print(table)
    return 0


def _cmd_export(args: argparse.Namespace, planner: Planner) -> int:
    """
    Export the calendar events into an iCalendar (.ics) file.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        _error("Please provide output .ics path.")
        return 1

    planner.set_scope(args.scope)
    events = list(planner.events())
    if not events:
        console.print("No calendar events to export.")
        return 0

    week_of = None
    if args.week_of:
        try:
            week_of = date.fromisoformat(args.week_of)
        except ValueError:
            _error(f"Invalid --week-of date: {args.week_of!r} (expected YYYY-MM-DD)")
            return 1

    n = export_events_to_ics(events, out_path, week_of=week_of, weeks=args.weeks)
    console.print(f"Exported {n} events to: {out_path}")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--dept", default="", help="Department prefix (e.g. CIS)")
    p.add_argument("--day", default="", help="Meeting days (e.g. MW)")
    p.add_argument("--time", default="", help="Meeting time (e.g. 10:15am-11:45am)")
    p.add_argument("--term", default="", help="Term (Full, Q1, Q2)")
    p.add_argument("--credits", default="", help="Credit units (e.g. 0.5)")


def _scope_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--scope",
        default=TermScope.OVERALL.value,
        choices=[s.value for s in TermScope],
        help="Terms to show (default: Overall)",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursecart", description="CourseCart CLI")
    parser.add_argument("--listing", type=Path, default=None, help="Course listing (.csv or .xlsx)")
    parser.add_argument("--prices", type=Path, default=None, help="Price list (.xlsx or .csv)")
    parser.add_argument("--selection", type=Path, default=None, help="Selection file (.json)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: COURSECART_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search and filter courses")
    p_search.add_argument("text", nargs="?", default="", help="Search text (code or title)")
    _add_filter_args(p_search)
    p_search.add_argument("--sort", default="code", choices=SORT_KEYS, help="Sort column")
    p_search.add_argument("--desc", action="store_true", help="Sort descending")
    p_search.add_argument("--limit", type=int, default=20, help="Max rows to show")

    sub.add_parser("options", help="Show the available filter values")

    p_sections = sub.add_parser("sections", help="Show the sections of a course")
    p_sections.add_argument("code", type=str, help="Course code (e.g. CIS-1200)")
    _add_filter_args(p_sections)

    p_add = sub.add_parser("add", help="Select a section by session id")
    p_add.add_argument("session_id", type=str, help="Session id (see 'sections')")

    p_remove = sub.add_parser("remove", help="Deselect a section by session id")
    p_remove.add_argument("session_id", type=str, help="Session id")

    sub.add_parser("selected", help="Show selected sections, conflicts and total price")

    p_calendar = sub.add_parser("calendar", help="Show the weekly schedule")
    _scope_arg(p_calendar)

    p_export = sub.add_parser("export", help="Export the weekly schedule to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. schedule.ics)")
    _scope_arg(p_export)
    p_export.add_argument("--week-of", default=None, help="Any date in the first week (YYYY-MM-DD)")
    p_export.add_argument("--weeks", type=int, default=14, help="Number of weekly repetitions")

    return parser


COMMANDS = {
    "search": _cmd_search,
    "options": _cmd_options,
    "sections": _cmd_sections,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "selected": _cmd_selected,
    "calendar": _cmd_calendar,
    "export": _cmd_export,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, loads the catalog, dispatches to command
    handlers, and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    args.selection = args.selection or config.selection_path()
    planner = Planner(selection=load_selection(args.selection))
    if not planner.load(args.listing or config.listing_path(), args.prices or config.prices_path()):
        _error(f"Error loading files: {planner.load_error}")
        raise SystemExit(1)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)
    raise SystemExit(handler(args, planner))
