from ..domain.repositories import ReservationRepository
from ..models import Reservation


async def list_user_reservations(
    res_repo: ReservationRepository,
    *,
    user_id: int,
) -> list[Reservation]:
    return await res_repo.list_by_user(user_id)


async def get_user_reservation(
    res_repo: ReservationRepository,
    *,
    reservation_id: int,
    user_id: int,
) -> Reservation | None:
    return await res_repo.get_for_user(reservation_id, user_id)
