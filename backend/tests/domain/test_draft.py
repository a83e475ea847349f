from datetime import date
from decimal import Decimal

import pytest
from venuebook.domain.draft import BookingDraft
from venuebook.domain.errors import ValidationError
from venuebook.domain.venue import VenueTerms
from venuebook.models import PricingMode


def _venue(**overrides: object) -> VenueTerms:
    fields: dict[str, object] = dict(
        venue_id=1,
        name="Garden Hall",
        open_time="08:00",
        close_time="22:00",
        rate_mode=PricingMode.SPLIT,
        rate_weekday=Decimal("5000"),
        rate_weekend=Decimal("8000"),
        capacity_max=100,
    )
    fields.update(overrides)
    return VenueTerms(**fields)  # type: ignore[arg-type]


def test_end_bounds_follow_start_time() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_start_time("20:00")
    assert draft.end_bounds == ("20:15", "22:00")


def test_end_bounds_default_to_opening_hours_without_start() -> None:
    draft = BookingDraft(venue=_venue())
    assert draft.end_bounds == ("08:00", "22:00")


def test_start_is_clamped_to_leave_a_minimum_slot() -> None:
    draft = BookingDraft(venue=_venue())
    assert draft.start_bounds == ("08:00", "21:45")
    draft.set_start_time("23:00")
    assert draft.start_time == "21:45"
    draft.set_start_time("06:00")
    assert draft.start_time == "08:00"


def test_moving_start_past_end_clears_end() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_start_time("10:00")
    draft.set_end_time("11:00")
    draft.set_start_time("10:50")
    assert draft.start_time == "10:50"
    assert draft.end_time == ""


def test_moving_start_keeps_end_still_in_range() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_start_time("10:00")
    draft.set_end_time("11:00")
    draft.set_start_time("10:45")
    assert draft.end_time == "11:00"


def test_end_time_is_clamped_into_bounds() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_start_time("12:00")
    draft.set_end_time("12:05")
    assert draft.end_time == "12:15"
    draft.set_end_time("23:30")
    assert draft.end_time == "22:00"


def test_guest_count_is_floored_and_capped() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_guest_count("0")
    assert draft.guest_count == 1
    draft.set_guest_count("-4")
    assert draft.guest_count == 1
    draft.set_guest_count(500)
    assert draft.guest_count == 100
    draft.set_guest_count(" 42 ")
    assert draft.guest_count == 42


def test_guest_count_without_capacity_is_not_capped() -> None:
    draft = BookingDraft(venue=_venue(capacity_max=None))
    draft.set_guest_count(500)
    assert draft.guest_count == 500


def test_guest_count_blank_or_text() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_guest_count("")
    assert draft.guest_count is None
    draft.set_guest_count("abc")
    assert draft.guest_count == "abc"


def test_changing_date_recomputes_quote() -> None:
    draft = BookingDraft(venue=_venue())
    assert draft.quote.applicable_rate == Decimal("0")
    weekday_quote = draft.set_event_date(date(2025, 6, 4))
    assert weekday_quote.applicable_rate == Decimal("5000")
    draft.set_event_date(date(2025, 5, 31))
    assert draft.quote.applicable_rate == Decimal("8000")
    assert draft.quote.deposit_amount == Decimal("800")


def test_is_submittable_is_evaluated_fresh() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_event_name("Ana's Debut")
    draft.set_event_type("Debut")
    draft.set_event_date(date(2025, 6, 1))
    draft.set_start_time("18:00")
    draft.set_end_time("21:00")
    draft.set_guest_count(80)
    assert draft.is_submittable is True

    draft.set_start_time("20:50")
    assert draft.end_time == ""
    assert draft.is_submittable is False


def test_picker_options_match_bounds() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_start_time("20:00")
    assert draft.start_options[0] == "08:00"
    assert draft.start_options[-1] == "21:45"
    assert draft.end_options == ["20:15", "20:30", "20:45", "21:00", "21:15", "21:30", "21:45", "22:00"]


def test_past_date_cannot_be_picked() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_event_date(date(2025, 6, 4))

    with pytest.raises(ValidationError) as excinfo:
        draft.set_event_date(date(2025, 4, 1))

    assert excinfo.value.field == "event_date"
    assert draft.event_date == date(2025, 6, 4)


def test_clearing_the_date_is_allowed() -> None:
    draft = BookingDraft(venue=_venue())
    draft.set_event_date(date(2025, 6, 4))
    assert draft.set_event_date(None).deposit_amount == Decimal("0")
    assert draft.event_date is None
