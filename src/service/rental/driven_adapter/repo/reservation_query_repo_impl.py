from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import Row, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rental.domain.enum.reservation_status import ReservationStatus
from src.service.rental.domain.value_object.reservation_view import ReservationView
from src.service.rental.driven_adapter.model.book_model import BookModel
from src.service.rental.driven_adapter.model.reservation_model import ReservationModel
from src.service.rental.driven_adapter.model.user_model import UserModel


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        If a session is injected (from UoW), yield it directly.
        Otherwise, open one from session_factory.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _base_query() -> Select[Any]:
        return (
            select(ReservationModel, UserModel.name, BookModel.title)
            .join(UserModel, UserModel.id == ReservationModel.user_id)
            .join(BookModel, BookModel.external_id == ReservationModel.book_external_id)
            .order_by(ReservationModel.id)
        )

    @staticmethod
    def _to_view(row: Row[Any]) -> ReservationView:
        db_reservation, user_name, book_title = row
        return ReservationView(
            id=db_reservation.id,
            user_id=db_reservation.user_id,
            user_name=user_name,
            book_external_id=db_reservation.book_external_id,
            book_title=book_title,
            rental_days=db_reservation.rental_days,
            start_date=db_reservation.start_date,
            expected_return_date=db_reservation.expected_return_date,
            actual_return_date=db_reservation.actual_return_date,
            daily_rate=db_reservation.daily_rate,
            total_fee=db_reservation.total_fee,
            late_fee=db_reservation.late_fee,
            status=ReservationStatus(db_reservation.status),
            created_at=db_reservation.created_at,
        )

    async def _fetch_all(self, query: Select[Any]) -> List[ReservationView]:
        async with self._get_session() as session:
            result = await session.execute(query)
            return [self._to_view(row) for row in result.all()]

    @Logger.io
    async def get_by_id(self, *, reservation_id: int) -> ReservationView | None:
        async with self._get_session() as session:
            result = await session.execute(
                self._base_query().where(ReservationModel.id == reservation_id)
            )
            row = result.one_or_none()

            if not row:
                return None

            return self._to_view(row)

    @Logger.io
    async def list_all(self) -> List[ReservationView]:
        return await self._fetch_all(self._base_query())

    @Logger.io
    async def list_by_user_id(self, *, user_id: int) -> List[ReservationView]:
        return await self._fetch_all(self._base_query().where(ReservationModel.user_id == user_id))

    @Logger.io
    async def list_by_status(self, *, status: ReservationStatus) -> List[ReservationView]:
        return await self._fetch_all(
            self._base_query().where(ReservationModel.status == status.value)
        )
