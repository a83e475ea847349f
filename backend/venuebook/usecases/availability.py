from datetime import date

from ..domain.errors import AvailabilityCheckFailed, StoreError
from ..domain.repositories import ReservationRepository
from ..domain.services import BookedWindow, find_conflict
from ..models import ACTIVE_STATUSES


async def list_booked_windows(
    res_repo: ReservationRepository,
    *,
    venue_id: int,
    event_date: date,
    for_update: bool = False,
) -> list[BookedWindow]:
    """Pending and confirmed windows for one venue/day, ordered by start time."""
    try:
        rows = await res_repo.list_active(venue_id, event_date, for_update=for_update)
    except StoreError as exc:
        raise AvailabilityCheckFailed() from exc
    windows = [
        BookedWindow(start_time=r.start_time, end_time=r.end_time)
        for r in rows
        if r.status in ACTIVE_STATUSES
    ]
    return sorted(windows, key=lambda w: w.start_time)


async def has_conflict(
    res_repo: ReservationRepository,
    *,
    venue_id: int,
    event_date: date,
    start_time: str,
    end_time: str,
) -> bool:
    """Locking read; call after ReservationRepository.lock_venue_day in the same transaction."""
    booked = await list_booked_windows(res_repo, venue_id=venue_id, event_date=event_date, for_update=True)
    return find_conflict(booked, start_time, end_time) is not None
