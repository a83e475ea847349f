from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..utils.time import add_minutes, clamp, time_options
from .pricing import RateQuote, quote
from .services import MIN_SLOT_MINUTES, check_event_date, parse_guest_count, validate_draft
from .venue import VenueTerms

GuestInput = Union[int, str, None]


@dataclass
class BookingDraft:
    """
    In-progress reservation request for one venue.

    The setters apply the editing rules of the booking form; assigning fields
    directly keeps raw values, which is what the server validates on submit.
    """

    venue: VenueTerms
    event_name: str = ""
    event_type: str = ""
    event_date: Optional[date] = None
    start_time: str = ""
    end_time: str = ""
    guest_count: GuestInput = None

    @property
    def quote(self) -> RateQuote:
        return quote(self.venue, self.event_date)

    @property
    def start_bounds(self) -> tuple[str, str]:
        return self.venue.open_time, add_minutes(self.venue.close_time, -MIN_SLOT_MINUTES)

    @property
    def end_bounds(self) -> tuple[str, str]:
        if not self.start_time:
            return self.venue.open_time, self.venue.close_time
        return add_minutes(self.start_time, MIN_SLOT_MINUTES), self.venue.close_time

    @property
    def start_options(self) -> list[str]:
        return time_options(*self.start_bounds)

    @property
    def end_options(self) -> list[str]:
        return time_options(*self.end_bounds)

    @property
    def is_submittable(self) -> bool:
        return validate_draft(self, self.venue).ok

    def set_event_name(self, name: str) -> None:
        self.event_name = name

    def set_event_type(self, event_type: str) -> None:
        self.event_type = event_type

    def set_event_date(self, event_date: Optional[date]) -> RateQuote:
        """Past days cannot be picked; the draft keeps its previous date."""
        if event_date is not None:
            check_event_date(event_date)
        self.event_date = event_date
        return self.quote

    def set_start_time(self, start_time: str) -> None:
        if not start_time:
            self.start_time = ""
            return
        self.start_time = clamp(start_time, *self.start_bounds) or ""
        end_min, _ = self.end_bounds
        # An end before the new minimum is cleared, not clamped.
        if self.end_time and self.end_time < end_min:
            self.end_time = ""

    def set_end_time(self, end_time: str) -> None:
        self.end_time = clamp(end_time, *self.end_bounds) or ""

    def set_guest_count(self, value: GuestInput) -> None:
        if value is None or str(value).strip() == "":
            self.guest_count = None
            return
        text = str(value).strip()
        negative = text.startswith("-")
        parsed = parse_guest_count(text[1:] if negative else text)
        if parsed is None:
            self.guest_count = text
            return
        count = max(1, -parsed if negative else parsed)
        if self.venue.capacity_max:
            count = min(count, self.venue.capacity_max)
        self.guest_count = count
