from abc import ABC, abstractmethod
from typing import List

from src.service.rental.domain.enum.reservation_status import ReservationStatus
from src.service.rental.domain.value_object.reservation_view import ReservationView


class IReservationQueryRepo(ABC):
    """Read-side reservation store. Listings are ordered by reservation id."""

    @abstractmethod
    async def get_by_id(self, *, reservation_id: int) -> ReservationView | None:
        pass

    @abstractmethod
    async def list_all(self) -> List[ReservationView]:
        pass

    @abstractmethod
    async def list_by_user_id(self, *, user_id: int) -> List[ReservationView]:
        pass

    @abstractmethod
    async def list_by_status(self, *, status: ReservationStatus) -> List[ReservationView]:
        pass
