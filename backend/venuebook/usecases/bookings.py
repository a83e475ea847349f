"""
Booking admission: validate a draft, admit it against the venue calendar,
then run the post-commit side effects (owner notification, deposit invoice).

The availability read and the insert share one transaction that starts by
locking the venue, so two overlapping submissions cannot both be admitted.
Everything after the commit is best effort with respect to the reservation:
a failed notification is only logged, a failed invoice leaves the
reservation pending and reports PartialSuccess.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union, cast

from ..domain.draft import BookingDraft
from ..domain.errors import (
    AvailabilityCheckFailed,
    BookingError,
    ErrorCode,
    InvoiceCreationFailed,
    LoginRequired,
    MalformedTimeError,
    NotificationFailed,
    PersistenceFailed,
    SlotUnavailable,
    StoreError,
    ValidationError,
)
from ..domain.pricing import RateQuote, quote
from ..domain.repositories import InvoiceGateway, NotificationGateway, ReservationRepository
from ..domain.services import ValidationResult, check_draft, parse_guest_count
from ..domain.services import validate_draft as _validate_draft
from ..domain.venue import VenueTerms
from ..models import EventType, Reservation, ReservationStatus
from ..utils.audit_log import emit_audit_log
from ..utils.auth import AuthSession
from .availability import has_conflict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rejected:
    code: ErrorCode
    title: str
    message: str
    field: Optional[str] = None


@dataclass(frozen=True)
class PartialSuccess:
    reservation_id: int
    message: str


@dataclass(frozen=True)
class Redirect:
    reservation_id: int
    url: str


SubmissionOutcome = Union[Rejected, PartialSuccess, Redirect]


@dataclass(frozen=True)
class SideEffectResult:
    ok: bool
    error: Optional[str] = None


def compute_quote(venue: VenueTerms, event_date: Optional[date]) -> RateQuote:
    return quote(venue, event_date)


def validate_draft(draft: BookingDraft, venue: VenueTerms) -> ValidationResult:
    return _validate_draft(draft, venue)


async def submit_booking(
    res_repo: ReservationRepository,
    notifier: NotificationGateway,
    invoices: InvoiceGateway,
    *,
    auth: AuthSession | None,
    draft: BookingDraft,
    venue: VenueTerms,
) -> SubmissionOutcome:
    try:
        reservation = await admit_reservation(res_repo, auth=auth, draft=draft, venue=venue)
    except BookingError as exc:
        emit_audit_log(
            action="reservation.rejected",
            venue_id=venue.venue_id,
            user_id=auth.user_id if auth else None,
            event_date=draft.event_date,
            start_time=draft.start_time or None,
            end_time=draft.end_time or None,
            reason=exc.code,
            message=exc.message,
        )
        return Rejected(
            code=exc.code,
            title=exc.title,
            message=exc.message,
            field=exc.field if isinstance(exc, ValidationError) else None,
        )

    emit_audit_log(
        action="reservation.created",
        venue_id=reservation.venue_id,
        user_id=reservation.user_id,
        reservation_id=reservation.id,
        event_date=reservation.event_date,
        start_time=reservation.start_time,
        end_time=reservation.end_time,
        status=reservation.status,
    )

    await notify_owner(notifier, reservation)

    deposit = quote(venue, reservation.event_date).deposit_amount
    try:
        url = await request_invoice(invoices, reservation=reservation, venue=venue, amount=int(deposit))
    except InvoiceCreationFailed as exc:
        return PartialSuccess(reservation_id=reservation.id, message=exc.message)
    return Redirect(reservation_id=reservation.id, url=url)


async def admit_reservation(
    res_repo: ReservationRepository,
    *,
    auth: AuthSession | None,
    draft: BookingDraft,
    venue: VenueTerms,
) -> Reservation:
    """
    Identity, validation, availability and insertion. Raises the BookingError
    for the first failed step; on success the reservation is committed as pending.
    """
    if auth is None:
        raise LoginRequired()
    try:
        check_draft(draft, venue)
    except MalformedTimeError as exc:
        # Stored venue hours that are not HH:MM; nothing the caller can fix.
        raise PersistenceFailed() from exc
    event_date = cast(date, draft.event_date)
    guests = parse_guest_count(draft.guest_count) or 1

    try:
        await res_repo.lock_venue_day(venue.venue_id, event_date)
    except StoreError as exc:
        await _release(res_repo)
        raise AvailabilityCheckFailed() from exc

    try:
        taken = await has_conflict(
            res_repo,
            venue_id=venue.venue_id,
            event_date=event_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
        )
    except AvailabilityCheckFailed:
        await _release(res_repo)
        raise
    if taken:
        await _release(res_repo)
        raise SlotUnavailable()

    try:
        reservation = await res_repo.create(
            venue_id=venue.venue_id,
            user_id=auth.user_id,
            event_name=draft.event_name.strip(),
            event_type=EventType(draft.event_type),
            event_date=event_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            guest_count=guests,
            status=ReservationStatus.PENDING,
        )
        await res_repo.commit()
    except StoreError as exc:
        await _release(res_repo)
        raise PersistenceFailed() from exc
    return reservation


async def notify_owner(notifier: NotificationGateway, reservation: Reservation) -> SideEffectResult:
    try:
        await notifier.notify_new_booking(reservation.id)
    except Exception as exc:  # notification never aborts an admitted booking
        failure = NotificationFailed(str(exc))
        logger.warning("notify_new_booking failed for reservation %s: %s", reservation.id, exc)
        emit_audit_log(
            action="reservation.notify_failed",
            venue_id=reservation.venue_id,
            user_id=reservation.user_id,
            reservation_id=reservation.id,
            reason=failure.code,
            message=failure.message,
        )
        return SideEffectResult(ok=False, error=failure.message)
    return SideEffectResult(ok=True)


async def request_invoice(
    invoices: InvoiceGateway,
    *,
    reservation: Reservation,
    venue: VenueTerms,
    amount: int,
) -> str:
    description = f"Reservation fee for booking “{venue.name}”"
    try:
        url = await invoices.create_invoice(reservation.id, amount, description)
    except Exception as exc:  # reservation stays pending and un-invoiced
        logger.error("invoice creation failed for reservation %s: %s", reservation.id, exc)
        emit_audit_log(
            action="reservation.invoice_failed",
            venue_id=reservation.venue_id,
            user_id=reservation.user_id,
            reservation_id=reservation.id,
            status=reservation.status,
            reason=ErrorCode.INVOICE_CREATION_FAILED,
            extra={"amount": amount},
        )
        raise InvoiceCreationFailed() from exc

    emit_audit_log(
        action="reservation.invoice_created",
        venue_id=reservation.venue_id,
        user_id=reservation.user_id,
        reservation_id=reservation.id,
        extra={"amount": amount},
    )
    return url


async def _release(res_repo: ReservationRepository) -> None:
    try:
        await res_repo.rollback()
    except StoreError as exc:
        logger.warning("rollback after rejected admission failed: %s", exc)
