"""
iCalendar (.ics) export.

We convert booked opportunities into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar

Time slots in the catalog are free text ("Saturday 9am-12pm", "Sunday 12-6pm"),
so the start/end times are parsed out of them first.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Tuple

from commubot.model import Opportunity

# "9am-12pm", "2-5pm", "10:30am - 1pm", "12-6pm"
_SLOT_RANGE_RE = re.compile(
    r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\s*-\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)?",
    re.IGNORECASE,
)


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _to_minutes(hour: int, minute: int, suffix: Optional[str]) -> int:
    if suffix == "am":
        hour = 0 if hour == 12 else hour
    elif suffix == "pm":
        hour = hour if hour == 12 else hour + 12
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time: {hour}:{minute}")
    return hour * 60 + minute


def parse_time_slot(slot: str) -> Optional[Tuple[str, str]]:
    """
    Extract ('HH:MM', 'HH:MM') from a time slot description.

    A start without am/pm takes the end's suffix ("2-5pm" -> 14:00-17:00),
    unless that would put it after the end ("10-2pm" -> 10:00-14:00).
    Returns None if no time range can be found.
    """
    m = _SLOT_RANGE_RE.search(slot or "")
    if not m:
        return None

    sh, sm, ssuf, eh, em, esuf = m.groups()
    ssuf = ssuf.lower() if ssuf else None
    esuf = esuf.lower() if esuf else None

    try:
        end = _to_minutes(int(eh), int(em or 0), esuf)
        start = _to_minutes(int(sh), int(sm or 0), ssuf or esuf)
        if ssuf is None and esuf == "pm" and start > end:
            start = _to_minutes(int(sh), int(sm or 0), "am")
    except ValueError:
        return None

    if end <= start:
        return None

    return f"{start // 60:02d}:{start % 60:02d}", f"{end // 60:02d}:{end % 60:02d}"


def _dt_local(date_yyyy_mm_dd: str, time_hh_mm: str) -> str:
    """
    Convert date + time to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.strptime(f"{date_yyyy_mm_dd} {time_hh_mm}", "%Y-%m-%d %H:%M")
    return dt.strftime("%Y%m%dT%H%M00")


def export_opportunities_to_ics(opportunities: Iterable[Opportunity], out_path: str | Path) -> int:
    """
    Export opportunities to an .ics file. Returns number of exported events.

    Opportunities without a usable date or time slot are skipped.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//CommuBot//EN")
    lines.append("CALSCALE:GREGORIAN")

    count = 0
    for opp in opportunities:
        times = parse_time_slot(opp.time_slot)
        if not (opp.available_date and times):
            continue

        try:
            dtstart = _dt_local(opp.available_date, times[0])
            dtend = _dt_local(opp.available_date, times[1])
        except ValueError:
            continue

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(f'commubot-opportunity-{opp.id}-{dtstart}')}")
        dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(f'{opp.title} ({opp.organization_name})')}")
        if opp.location:
            lines.append(f"LOCATION:{_ics_escape(opp.location)}")

        description = opp.description
        if opp.contact_email:
            description = f"{description}\nContact: {opp.contact_email}".strip()
        if description:
            lines.append(f"DESCRIPTION:{_ics_escape(description)}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
