from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import StoreError
from ..domain.repositories import ReservationRepository, VenueRepository
from ..models import ACTIVE_STATUSES, EventType, Reservation, ReservationStatus, Venue


class SqlAlchemyVenueRepository(VenueRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, venue_id: int) -> Venue | None:
        try:
            result = await self.session.scalar(select(Venue).where(Venue.id == venue_id))
        except SQLAlchemyError as exc:
            raise StoreError("failed to load venue") from exc
        return result if isinstance(result, Venue) else None


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def lock_venue_day(self, venue_id: int, event_date: date) -> None:
        # Row lock on the venue serializes check-then-insert for all of its days.
        # Pair with list_active(for_update=True): a plain read may see a snapshot older than the lock.
        try:
            await self.session.execute(select(Venue.id).where(Venue.id == venue_id).with_for_update())
        except SQLAlchemyError as exc:
            raise StoreError("failed to lock venue") from exc

    async def list_active(
        self,
        venue_id: int,
        event_date: date,
        *,
        for_update: bool = False,
    ) -> List[Reservation]:
        stmt = (
            select(Reservation)
            .where(
                Reservation.venue_id == venue_id,
                Reservation.event_date == event_date,
                Reservation.status.in_(ACTIVE_STATUSES),
            )
            .order_by(Reservation.start_time)
        )
        if for_update:
            stmt = stmt.with_for_update()
        try:
            rows = await self.session.scalars(stmt)
        except SQLAlchemyError as exc:
            raise StoreError("failed to list reservations") from exc
        return list(rows.all())

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
    ) -> Reservation:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        reservation = Reservation(
            venue_id=venue_id,
            user_id=user_id,
            event_name=event_name,
            event_type=event_type,
            event_date=event_date,
            start_time=start_time,
            end_time=end_time,
            guest_count=guest_count,
            status=status,
            created_at=now,
            updated_at=now,
        )
        self.session.add(reservation)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise StoreError("failed to insert reservation") from exc
        return reservation

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise StoreError("failed to commit") from exc

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError as exc:
            raise StoreError("failed to roll back") from exc

    async def list_by_user(self, user_id: int) -> List[Reservation]:
        stmt = (
            select(Reservation)
            .where(Reservation.user_id == user_id)
            .order_by(Reservation.event_date.desc(), Reservation.start_time)
        )
        rows = await self.session.scalars(stmt)
        return list(rows.all())

    async def get_for_user(self, reservation_id: int, user_id: int) -> Optional[Reservation]:
        stmt = select(Reservation).where(Reservation.id == reservation_id, Reservation.user_id == user_id)
        result = await self.session.scalar(stmt)
        return result if isinstance(result, Reservation) else None
