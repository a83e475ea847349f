from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union, cast

from pydantic import BaseModel, Field, StringConstraints

from .domain.draft import BookingDraft
from .domain.pricing import RateQuote
from .domain.services import BookedWindow, ValidationResult
from .domain.venue import VenueTerms
from .models import EventType, Reservation, ReservationStatus
from .usecases.bookings import PartialSuccess, Redirect, Rejected, SubmissionOutcome

WallClock = Annotated[str, StringConstraints(pattern=r"^(([01]\d|2[0-3]):[0-5]\d)?$")]


class QuoteRead(BaseModel):
    venue_id: int
    event_date: Optional[date]
    applicable_rate: Decimal
    deposit_amount: Decimal

    @classmethod
    def from_quote(cls, *, venue_id: int, event_date: Optional[date], quote: RateQuote) -> "QuoteRead":
        return cls(
            venue_id=venue_id,
            event_date=event_date,
            applicable_rate=quote.applicable_rate,
            deposit_amount=quote.deposit_amount,
        )


class BookedWindowRead(BaseModel):
    start_time: str
    end_time: str


class AvailabilityRead(BaseModel):
    venue_id: int
    event_date: date
    booked: list[BookedWindowRead]

    @classmethod
    def from_windows(cls, *, venue_id: int, event_date: date, windows: list[BookedWindow]) -> "AvailabilityRead":
        return cls(
            venue_id=venue_id,
            event_date=event_date,
            booked=[BookedWindowRead(start_time=w.start_time, end_time=w.end_time) for w in windows],
        )


class TimeOptionsRead(BaseModel):
    start_min: str
    start_max: str
    end_min: str
    end_max: str
    start_options: list[str]
    end_options: list[str]

    @classmethod
    def from_draft(cls, draft: BookingDraft) -> "TimeOptionsRead":
        start_min, start_max = draft.start_bounds
        end_min, end_max = draft.end_bounds
        return cls(
            start_min=start_min,
            start_max=start_max,
            end_min=end_min,
            end_max=end_max,
            start_options=draft.start_options,
            end_options=draft.end_options,
        )


class BookingDraftIn(BaseModel):
    event_name: str = ""
    event_type: str = Field(default="", description=f"One of: {', '.join(e.value for e in EventType)}")
    event_date: Optional[date] = None
    start_time: Optional[WallClock] = None
    end_time: Optional[WallClock] = None
    guest_count: Union[int, str, None] = None

    def to_draft(self, venue: VenueTerms) -> BookingDraft:
        return BookingDraft(
            venue=venue,
            event_name=self.event_name,
            event_type=self.event_type,
            event_date=self.event_date,
            start_time=self.start_time or "",
            end_time=self.end_time or "",
            guest_count=self.guest_count,
        )


class ValidationResultRead(BaseModel):
    ok: bool
    field: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResultRead":
        if result.error is None:
            return cls(ok=True)
        return cls(ok=False, field=result.field, title=result.error.title, message=result.message)


class SubmissionRead(BaseModel):
    outcome: Literal["rejected", "partial_success", "redirect"]
    reservation_id: Optional[int] = None
    invoice_url: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: SubmissionOutcome) -> "SubmissionRead":
        if isinstance(outcome, Redirect):
            return cls(outcome="redirect", reservation_id=outcome.reservation_id, invoice_url=outcome.url)
        if isinstance(outcome, PartialSuccess):
            return cls(
                outcome="partial_success",
                reservation_id=outcome.reservation_id,
                title="Booking Created",
                message=outcome.message,
            )
        rejected = cast(Rejected, outcome)
        return cls(
            outcome="rejected",
            code=rejected.code.value,
            title=rejected.title,
            message=rejected.message,
            field=rejected.field,
        )


class ReservationRead(BaseModel):
    reservation_id: int
    venue_id: int
    user_id: int
    event_name: str
    event_type: EventType
    event_date: date
    start_time: str
    end_time: str
    guest_count: int
    status: ReservationStatus

    @classmethod
    def from_db(cls, *, reservation: Reservation) -> "ReservationRead":
        return cls(
            reservation_id=reservation.id,
            venue_id=reservation.venue_id,
            user_id=reservation.user_id,
            event_name=reservation.event_name,
            event_type=reservation.event_type,
            event_date=reservation.event_date,
            start_time=reservation.start_time,
            end_time=reservation.end_time,
            guest_count=reservation.guest_count,
            status=reservation.status,
        )
