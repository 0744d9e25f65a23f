from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.rental.domain.entity.reservation_entity import Reservation
from src.service.rental.domain.enum.reservation_status import ReservationStatus
from src.service.rental.driven_adapter.model.reservation_model import ReservationModel


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_reservation: ReservationModel) -> Reservation:
        return Reservation(
            id=db_reservation.id,
            user_id=db_reservation.user_id,
            book_external_id=db_reservation.book_external_id,
            rental_days=db_reservation.rental_days,
            start_date=db_reservation.start_date,
            expected_return_date=db_reservation.expected_return_date,
            actual_return_date=db_reservation.actual_return_date,
            daily_rate=db_reservation.daily_rate,
            total_fee=db_reservation.total_fee,
            late_fee=db_reservation.late_fee,
            status=ReservationStatus(db_reservation.status),
            created_at=db_reservation.created_at,
            updated_at=db_reservation.updated_at,
        )

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        db_reservation = ReservationModel(
            user_id=reservation.user_id,
            book_external_id=reservation.book_external_id,
            rental_days=reservation.rental_days,
            start_date=reservation.start_date,
            expected_return_date=reservation.expected_return_date,
            daily_rate=reservation.daily_rate,
            total_fee=reservation.total_fee,
            late_fee=reservation.late_fee,
            status=reservation.status.value,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )
        self.session.add(db_reservation)
        await self.session.flush()  # assigns id
        await self.session.refresh(db_reservation)

        return self._to_entity(db_reservation)

    @Logger.io
    async def get_by_id_for_update(self, *, reservation_id: int) -> Reservation | None:
        result = await self.session.execute(
            select(ReservationModel).where(ReservationModel.id == reservation_id).with_for_update()
        )
        db_reservation = result.scalar_one_or_none()

        if not db_reservation:
            return None

        return self._to_entity(db_reservation)

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        # Only an ACTIVE row may transition, so a reservation is returned once
        result = await self.session.execute(
            update(ReservationModel)
            .where(
                ReservationModel.id == reservation.id,
                ReservationModel.status == ReservationStatus.ACTIVE.value,
            )
            .values(
                status=reservation.status.value,
                actual_return_date=reservation.actual_return_date,
                late_fee=reservation.late_fee,
                updated_at=reservation.updated_at,
            )
            .returning(ReservationModel)
            .execution_options(populate_existing=True)
        )
        db_reservation = result.scalar_one_or_none()

        if not db_reservation:
            raise ConflictError('Reservation already returned')

        return self._to_entity(db_reservation)
