from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from ..models import EventType
from ..utils.time import format_12_hour, local_today, overlaps, to_minutes
from .errors import ValidationError
from .venue import VenueTerms

if TYPE_CHECKING:
    from .draft import BookingDraft

MIN_SLOT_MINUTES = 15
_DIGITS = re.compile(r"\d+")


@dataclass(frozen=True)
class ValidationResult:
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def field(self) -> Optional[str]:
        return self.error.field if self.error else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


@dataclass(frozen=True)
class BookedWindow:
    start_time: str
    end_time: str


def parse_guest_count(value: object) -> Optional[int]:
    """Return the guest count if `value` is a whole number written in digits."""
    if isinstance(value, bool) or value is None:
        return None
    text = str(value).strip()
    if not _DIGITS.fullmatch(text):
        return None
    return int(text)


def check_event_date(event_date: Optional[date]) -> None:
    if event_date is None:
        raise ValidationError("event_date", "Please select an event date.", title="Date Required")
    if event_date < local_today():
        raise ValidationError("event_date", "Please choose a date that is not in the past.", title="Date Unavailable")


def check_draft(draft: BookingDraft, venue: VenueTerms) -> None:
    """
    Pure validation of a booking draft against venue terms.
    Checks run in a fixed order and the first violated rule raises ValidationError.
    """
    if not (draft.event_name or "").strip():
        raise ValidationError("event_name", "Please enter an event name.", title="Event Name Required")
    if not draft.event_type:
        raise ValidationError("event_type", "Please select an event type.", title="Event Type Required")
    if draft.event_type not in {e.value for e in EventType}:
        raise ValidationError("event_type", "Please select a valid event type.", title="Event Type Required")
    check_event_date(draft.event_date)
    if not draft.start_time:
        raise ValidationError("start_time", "Please select a start time.", title="Start Time Required")
    if not draft.end_time:
        raise ValidationError("end_time", "Please select an end time.", title="End Time Required")
    if draft.start_time >= draft.end_time:
        raise ValidationError(
            "end_time",
            "Start time cannot be later than or equal to end time.",
            title="Time Error",
        )
    if draft.start_time < venue.open_time or draft.end_time > venue.close_time:
        field = "start_time" if draft.start_time < venue.open_time else "end_time"
        raise ValidationError(
            field,
            f"Please choose a time between {format_12_hour(venue.open_time)} "
            f"and {format_12_hour(venue.close_time)}.",
            title="Outside Operating Hours",
        )
    if to_minutes(draft.end_time) - to_minutes(draft.start_time) < MIN_SLOT_MINUTES:
        raise ValidationError(
            "end_time",
            f"Bookings must be at least {MIN_SLOT_MINUTES} minutes long.",
            title="Time Error",
        )

    guests = parse_guest_count(draft.guest_count)
    if guests is None or guests < 1:
        raise ValidationError(
            "guest_count",
            "Please enter a valid guest count (1 or more).",
            title="Invalid Guests",
        )
    if venue.capacity_max and guests > venue.capacity_max:
        raise ValidationError(
            "guest_count",
            f"Max capacity is {venue.capacity_max} guests.",
            title="Over Capacity",
        )


def validate_draft(draft: BookingDraft, venue: VenueTerms) -> ValidationResult:
    try:
        check_draft(draft, venue)
    except ValidationError as exc:
        return ValidationResult(error=exc)
    return ValidationResult()


def find_conflict(booked: Iterable[BookedWindow], start: str, end: str) -> Optional[BookedWindow]:
    for window in booked:
        if overlaps(start, end, window.start_time, window.end_time):
            return window
    return None
