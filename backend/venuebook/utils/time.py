"""Wall-clock "HH:MM" helpers.

Times are venue-local and never converted between timezones. Zero-padded
"HH:MM" strings sort the same way as the minutes they denote, so plain string
comparison is valid for ordering and clamping.
"""

import re
from datetime import date

from ..domain.errors import MalformedTimeError

MINUTES_PER_DAY = 24 * 60
_HHMM = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def to_minutes(hhmm: str) -> int:
    match = _HHMM.fullmatch(hhmm) if isinstance(hhmm, str) else None
    if match is None:
        raise MalformedTimeError(f"expected HH:MM, got {hhmm!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def from_minutes(total: int) -> str:
    total %= MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def add_minutes(hhmm: str, delta: int) -> str:
    """Shift by `delta` minutes, wrapping around midnight."""
    return from_minutes(to_minutes(hhmm) + delta)


def clamp(hhmm: str | None, low: str | None, high: str | None) -> str | None:
    if not hhmm:
        return hhmm
    if low and hhmm < low:
        return low
    if high and hhmm > high:
        return high
    return hhmm


def overlaps(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """Half-open [start, end) overlap; back-to-back windows do not overlap."""
    return to_minutes(a_start) < to_minutes(b_end) and to_minutes(b_start) < to_minutes(a_end)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def format_12_hour(hhmm: str | None) -> str:
    if not hhmm:
        return ""
    minutes = to_minutes(hhmm)
    hours = minutes // 60
    suffix = "PM" if hours >= 12 else "AM"
    display = hours % 12 or 12
    return f"{display:02d}:{minutes % 60:02d} {suffix}"


def time_options(low: str = "00:00", high: str = "23:59", *, step: int = 15) -> list[str]:
    """Grid values from midnight every `step` minutes that fall inside [low, high]."""
    if step <= 0:
        raise ValueError("step must be positive")
    return [
        slot
        for slot in (from_minutes(m) for m in range(0, MINUTES_PER_DAY, step))
        if low <= slot <= high
    ]


def local_today() -> date:
    """Venue-local calendar date; bookings carry no timezone."""
    return date.today()
