from abc import ABC, abstractmethod

from src.service.rental.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    """
    Write-side reservation store, bound to the unit of work session.

    Responsibilities:
    - Insert new reservations (store assigns the id)
    - Lock a reservation for the return flow
    - Persist the RETURNED transition
    """

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def get_by_id_for_update(self, *, reservation_id: int) -> Reservation | None:
        pass

    @abstractmethod
    async def update(self, *, reservation: Reservation) -> Reservation:
        """
        Raises:
            ConflictError: When the stored row is no longer ACTIVE
        """
        pass
