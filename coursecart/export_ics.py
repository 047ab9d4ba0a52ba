"""
iCalendar (.ics) export.

Calendar events only know a weekday and a time, so they are anchored on the
week that contains `week_of` and repeat weekly. The file can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable

from coursecart.model import CalendarEvent


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def week_start(day: date) -> date:
    """
    Monday of the week containing `day`.
    """
    return day - timedelta(days=day.weekday())


def next_monday(today: date | None = None) -> date:
    today = today or date.today()
    return week_start(today) + timedelta(days=7)


def _dt_local(day: date, time_hh_mm_ss: str) -> str:
    """
    Convert date + 'HH:MM:SS' to ICS local datetime string 'YYYYMMDDTHHMMSS'.
    """
    t = datetime.strptime(time_hh_mm_ss, "%H:%M:%S").time()
    return datetime.combine(day, t).strftime("%Y%m%dT%H%M%S")


def export_events_to_ics(
    events: Iterable[CalendarEvent],
    out_path: str | Path,
    week_of: date | None = None,
    weeks: int = 14,
) -> int:
    """
    Export weekly events to an .ics file. Returns number of exported events.
    """
    if weeks < 1:
        raise ValueError("weeks must be at least 1")

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    monday = week_start(week_of) if week_of else next_monday()

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//CourseCart//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for ev in events:
        for ordinal in ev.days_of_week:
            day = monday + timedelta(days=ordinal - 1)
            try:
                dtstart = _dt_local(day, ev.start_time)
                dtend = _dt_local(day, ev.end_time)
            except ValueError:
                continue

            uid = f"{ev.title}-{dtstart}-{count}@coursecart"

            lines.append("BEGIN:VEVENT")
            lines.append(f"UID:{_ics_escape(uid)}")
            lines.append(f"DTSTAMP:{dtstamp}")
            lines.append(f"DTSTART:{dtstart}")
            lines.append(f"DTEND:{dtend}")
            lines.append(f"RRULE:FREQ=WEEKLY;COUNT={weeks}")
            lines.append(f"SUMMARY:{_ics_escape(ev.title)}")
            if ev.term:
                lines.append(f"DESCRIPTION:{_ics_escape('Term: ' + ev.term)}")
            lines.append(f"X-COLOR:{ev.color}")
            lines.append("END:VEVENT")
            count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
