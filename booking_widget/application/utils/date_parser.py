from __future__ import annotations

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

MONTH_NAMES = {
    "janvier": 1,
    "fevrier": 2,
    "février": 2,
    "mars": 3,
    "avril": 4,
    "mai": 5,
    "juin": 6,
    "juillet": 7,
    "aout": 8,
    "août": 8,
    "septembre": 9,
    "octobre": 10,
    "novembre": 11,
    "decembre": 12,
    "décembre": 12,
}

ISO_DATE_PATTERN = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")
DAY_MONTH_PATTERN = re.compile(r"\b(\d{1,2})(?:er)?\s+([a-zàâäéèêëîïôöûüç]+)", re.IGNORECASE)

TIME_PATTERNS = (
    re.compile(r"\b(\d{1,2})\s?h(\d{2})?\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,2}):(\d{2})\b"),
)


def today_in(timezone: str | None) -> date:
    try:
        tz = ZoneInfo(timezone) if timezone else ZoneInfo("UTC")
    except Exception:
        tz = ZoneInfo("UTC")
    return datetime.now(tz).date()


def extract_date(text: str, reference_date: date | None = None) -> str | None:
    """
    Extract a calendar date as YYYY-MM-DD.

    A literal ISO date wins and is returned verbatim. Otherwise "<day> <month>"
    is resolved against the current year, rolling to next year when that day
    has already passed. Day/month combinations are not validated.
    """
    if reference_date is None:
        reference_date = date.today()

    iso_match = ISO_DATE_PATTERN.search(text)
    if iso_match:
        return iso_match.group(1)

    for match in DAY_MONTH_PATTERN.finditer(text):
        month = MONTH_NAMES.get(match.group(2).lower())
        if month is None:
            continue
        day = int(match.group(1))
        year = reference_date.year
        if (month, day) < (reference_date.month, reference_date.day):
            year += 1
        return f"{year:04d}-{month:02d}-{day:02d}"

    return None


def extract_time(text: str) -> str | None:
    """Extract a clock time as HH:MM. "14h" -> "14:00", "9:05" -> "09:05". Ranges are not validated."""
    for pattern in TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            hour = int(match.group(1))
            minute = match.group(2) or "00"
            return f"{hour:02d}:{minute}"
    return None
