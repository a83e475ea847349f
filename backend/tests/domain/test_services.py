from datetime import date

import pytest
from venuebook.domain.draft import BookingDraft
from venuebook.domain.errors import ValidationError
from venuebook.domain.services import BookedWindow, check_draft, find_conflict, validate_draft
from venuebook.domain.venue import VenueTerms

VENUE = VenueTerms(venue_id=1, name="Garden Hall", open_time="08:00", close_time="22:00", capacity_max=150)


def _draft(**overrides: object) -> BookingDraft:
    fields: dict[str, object] = dict(
        event_name="Company Offsite",
        event_type="Corporate",
        event_date=date(2025, 6, 1),
        start_time="10:00",
        end_time="12:00",
        guest_count="40",
    )
    fields.update(overrides)
    return BookingDraft(venue=VENUE, **fields)  # type: ignore[arg-type]


def test_accepts_complete_draft() -> None:
    result = validate_draft(_draft(), VENUE)
    assert result.ok
    assert result.field is None


@pytest.mark.parametrize(
    ("overrides", "field", "message"),
    [
        ({"event_name": "   "}, "event_name", "Please enter an event name."),
        ({"event_type": ""}, "event_type", "Please select an event type."),
        ({"event_type": "Rave"}, "event_type", "Please select a valid event type."),
        ({"event_date": None}, "event_date", "Please select an event date."),
        ({"event_date": date(2025, 4, 30)}, "event_date", "Please choose a date that is not in the past."),
        ({"start_time": ""}, "start_time", "Please select a start time."),
        ({"end_time": ""}, "end_time", "Please select an end time."),
        ({"start_time": "12:00", "end_time": "12:00"}, "end_time", "Start time cannot be later than or equal to end time."),
        ({"start_time": "13:00", "end_time": "12:00"}, "end_time", "Start time cannot be later than or equal to end time."),
        ({"start_time": "07:00"}, "start_time", "Please choose a time between 08:00 AM and 10:00 PM."),
        ({"end_time": "22:30"}, "end_time", "Please choose a time between 08:00 AM and 10:00 PM."),
        ({"end_time": "10:10"}, "end_time", "Bookings must be at least 15 minutes long."),
        ({"guest_count": "abc"}, "guest_count", "Please enter a valid guest count (1 or more)."),
        ({"guest_count": "0"}, "guest_count", "Please enter a valid guest count (1 or more)."),
        ({"guest_count": "2.5"}, "guest_count", "Please enter a valid guest count (1 or more)."),
        ({"guest_count": None}, "guest_count", "Please enter a valid guest count (1 or more)."),
        ({"guest_count": 151}, "guest_count", "Max capacity is 150 guests."),
    ],
)
def test_reports_specific_rule(overrides: dict[str, object], field: str, message: str) -> None:
    result = validate_draft(_draft(**overrides), VENUE)
    assert not result.ok
    assert result.field == field
    assert result.message == message


def test_first_violation_wins() -> None:
    draft = _draft(event_name="", event_type="", guest_count="abc")
    with pytest.raises(ValidationError) as excinfo:
        check_draft(draft, VENUE)
    assert excinfo.value.field == "event_name"
    assert excinfo.value.title == "Event Name Required"


def test_time_order_checked_before_guest_count() -> None:
    result = validate_draft(_draft(start_time="15:00", end_time="14:00", guest_count="0"), VENUE)
    assert result.message == "Start time cannot be later than or equal to end time."


def test_find_conflict_returns_overlapping_window() -> None:
    booked = [BookedWindow("08:00", "09:00"), BookedWindow("10:00", "12:00")]
    assert find_conflict(booked, "11:00", "13:00") == BookedWindow("10:00", "12:00")
    assert find_conflict(booked, "09:00", "10:00") is None


def test_event_today_is_not_in_the_past(fixed_today: date) -> None:
    assert validate_draft(_draft(event_date=fixed_today), VENUE).ok


def test_past_date_is_reported_before_times() -> None:
    result = validate_draft(_draft(event_date=date(2024, 12, 31), start_time=""), VENUE)
    assert result.field == "event_date"
    assert result.error is not None
    assert result.error.title == "Date Unavailable"
