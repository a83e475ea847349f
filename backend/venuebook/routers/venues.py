from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, get_venue_terms
from ..domain.draft import BookingDraft
from ..domain.errors import AvailabilityCheckFailed
from ..domain.venue import VenueTerms
from ..infrastructure.repositories import SqlAlchemyReservationRepository
from ..schemas import AvailabilityRead, QuoteRead, TimeOptionsRead, WallClock
from ..usecases import availability as availability_usecase
from ..usecases import bookings as booking_usecase

router = APIRouter(prefix="/venues", tags=["venues"])


@router.get("/{venue_id}/quote", response_model=QuoteRead)
async def get_quote(
    event_date: Optional[date] = Query(default=None, description="Venue-local calendar date"),
    venue: VenueTerms = Depends(get_venue_terms),
) -> QuoteRead:
    quote = booking_usecase.compute_quote(venue, event_date)
    return QuoteRead.from_quote(venue_id=venue.venue_id, event_date=event_date, quote=quote)


@router.get("/{venue_id}/availability", response_model=AvailabilityRead)
async def get_availability(
    event_date: date = Query(..., description="Venue-local calendar date"),
    venue: VenueTerms = Depends(get_venue_terms),
    session: AsyncSession = Depends(get_session),
) -> AvailabilityRead:
    res_repo = SqlAlchemyReservationRepository(session)
    try:
        windows = await availability_usecase.list_booked_windows(
            res_repo,
            venue_id=venue.venue_id,
            event_date=event_date,
        )
    except AvailabilityCheckFailed as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    return AvailabilityRead.from_windows(venue_id=venue.venue_id, event_date=event_date, windows=windows)


@router.get("/{venue_id}/time-options", response_model=TimeOptionsRead)
async def get_time_options(
    start_time: Optional[WallClock] = Query(default=None),
    venue: VenueTerms = Depends(get_venue_terms),
) -> TimeOptionsRead:
    draft = BookingDraft(venue=venue)
    draft.set_start_time(start_time or "")
    return TimeOptionsRead.from_draft(draft)
