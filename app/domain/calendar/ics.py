"""
iCalendar rendering for the read-only task feed.

One all-day VEVENT per task, keyed on its due date. Only stored rows are
rendered; recurring seeds are not expanded here.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from ...config import CALENDAR_PRODID, CALENDAR_UID_DOMAIN
from ...utils.dates import as_date

CRLF = "\r\n"


def escape_text(value: Optional[str]) -> str:
    """Escape a TEXT value (RFC 5545 3.3.11); empty titles become ``Task``."""
    text = value or "Task"
    text = text.replace("\\", "\\\\")
    text = text.replace(";", "\\;").replace(",", "\\,")
    return text.replace("\r\n", " ").replace("\n", " ")


def format_stamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def render_event(task: Any, stamp: str, uid_domain: str = CALENDAR_UID_DOMAIN) -> list[str]:
    return [
        "BEGIN:VEVENT",
        f"UID:{task.id}@{uid_domain}",
        f"DTSTAMP:{stamp}",
        f"DTSTART;VALUE=DATE:{as_date(task.due_date).strftime('%Y%m%d')}",
        f"SUMMARY:{escape_text(task.title)}",
        "END:VEVENT",
    ]


def render_calendar(
    tasks: Iterable[Any],
    now: Optional[datetime] = None,
    prodid: str = CALENDAR_PRODID,
    uid_domain: str = CALENDAR_UID_DOMAIN,
) -> str:
    stamp = format_stamp(now or datetime.now(timezone.utc))

    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", f"PRODID:{prodid}"]
    for task in tasks:
        lines.extend(render_event(task, stamp, uid_domain))
    lines.append("END:VCALENDAR")

    return CRLF.join(lines)
