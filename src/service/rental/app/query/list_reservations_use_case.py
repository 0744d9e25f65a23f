from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rental.domain.enum.reservation_status import ReservationStatus
from src.service.rental.domain.value_object.reservation_view import ReservationView


class ListReservationsUseCase:
    """Read-only listings; filtering is delegated to the store."""

    def __init__(self, *, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def list_all(self) -> List[ReservationView]:
        return await self.reservation_query_repo.list_all()

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[ReservationView]:
        return await self.reservation_query_repo.list_by_user_id(user_id=user_id)

    @Logger.io
    async def list_active(self) -> List[ReservationView]:
        return await self.reservation_query_repo.list_by_status(status=ReservationStatus.ACTIVE)
