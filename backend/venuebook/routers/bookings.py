from typing import List, cast

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import (
    get_auth_session,
    get_current_user_id,
    get_invoice_gateway,
    get_notification_gateway,
    get_session,
    get_venue_terms,
)
from ..domain.errors import ErrorCode
from ..domain.repositories import InvoiceGateway, NotificationGateway
from ..domain.venue import VenueTerms
from ..infrastructure.repositories import SqlAlchemyReservationRepository
from ..schemas import BookingDraftIn, ReservationRead, SubmissionRead, ValidationResultRead
from ..usecases import bookings as booking_usecase
from ..usecases import reservations as reservation_usecase
from ..usecases.bookings import PartialSuccess, Redirect, Rejected, SubmissionOutcome
from ..utils.auth import AuthSession

router = APIRouter(prefix="", tags=["bookings"])

_REJECTION_STATUS = {
    ErrorCode.LOGIN_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SLOT_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.AVAILABILITY_CHECK_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.PERSISTENCE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _status_for(outcome: SubmissionOutcome) -> int:
    if isinstance(outcome, Redirect):
        return status.HTTP_201_CREATED
    if isinstance(outcome, PartialSuccess):
        return status.HTTP_202_ACCEPTED
    return _REJECTION_STATUS.get(cast(Rejected, outcome).code, status.HTTP_400_BAD_REQUEST)


@router.post("/venues/{venue_id}/bookings/validate", response_model=ValidationResultRead)
async def validate_booking(
    payload: BookingDraftIn,
    venue: VenueTerms = Depends(get_venue_terms),
) -> ValidationResultRead:
    result = booking_usecase.validate_draft(payload.to_draft(venue), venue)
    return ValidationResultRead.from_result(result)


@router.post("/venues/{venue_id}/bookings", response_model=SubmissionRead)
async def submit_booking(
    payload: BookingDraftIn,
    response: Response,
    venue: VenueTerms = Depends(get_venue_terms),
    session: AsyncSession = Depends(get_session),
    auth: AuthSession | None = Depends(get_auth_session),
    notifier: NotificationGateway = Depends(get_notification_gateway),
    invoices: InvoiceGateway = Depends(get_invoice_gateway),
) -> SubmissionRead:
    res_repo = SqlAlchemyReservationRepository(session)
    outcome = await booking_usecase.submit_booking(
        res_repo,
        notifier,
        invoices,
        auth=auth,
        draft=payload.to_draft(venue),
        venue=venue,
    )
    response.status_code = _status_for(outcome)
    if isinstance(outcome, Redirect):
        response.headers["Location"] = outcome.url
    elif isinstance(outcome, Rejected) and outcome.code == ErrorCode.LOGIN_REQUIRED:
        response.headers["WWW-Authenticate"] = "Bearer"
    return SubmissionRead.from_outcome(outcome)


@router.get("/me/reservations", response_model=List[ReservationRead])
async def list_my_reservations(
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
) -> list[ReservationRead]:
    res_repo = SqlAlchemyReservationRepository(session)
    rows = await reservation_usecase.list_user_reservations(res_repo, user_id=user_id)
    return [ReservationRead.from_db(reservation=res) for res in rows]


@router.get("/me/reservations/{reservation_id}", response_model=ReservationRead)
async def get_my_reservation(
    reservation_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
    user_id: int = Depends(get_current_user_id),
) -> ReservationRead:
    res_repo = SqlAlchemyReservationRepository(session)
    reservation = await reservation_usecase.get_user_reservation(
        res_repo,
        reservation_id=reservation_id,
        user_id=user_id,
    )
    if reservation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")
    return ReservationRead.from_db(reservation=reservation)
