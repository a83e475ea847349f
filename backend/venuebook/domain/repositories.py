from __future__ import annotations

from datetime import date
from typing import Protocol

from ..models import EventType, Reservation, ReservationStatus, Venue


class VenueRepository(Protocol):
    async def get(self, venue_id: int) -> Venue | None: ...


class ReservationRepository(Protocol):
    async def lock_venue_day(self, venue_id: int, event_date: date) -> None:
        """Serialize admissions for one venue/day until commit or rollback."""
        ...

    async def list_active(
        self,
        venue_id: int,
        event_date: date,
        *,
        for_update: bool = False,
    ) -> list[Reservation]:
        """Pending and confirmed rows; `for_update` makes it a locking, current read."""
        ...

    async def create(
        self,
        *,
        venue_id: int,
        user_id: int,
        event_name: str,
        event_type: EventType,
        event_date: date,
        start_time: str,
        end_time: str,
        guest_count: int,
        status: ReservationStatus,
    ) -> Reservation: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def list_by_user(self, user_id: int) -> list[Reservation]: ...

    async def get_for_user(self, reservation_id: int, user_id: int) -> Reservation | None: ...


class NotificationGateway(Protocol):
    async def notify_new_booking(self, reservation_id: int) -> None: ...


class InvoiceGateway(Protocol):
    async def create_invoice(self, reservation_id: int, amount: int, description: str) -> str:
        """Return the payment destination URL for the new invoice."""
        ...
