from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.rental_metrics import metrics
from src.service.rental.domain.value_object.rental_pricing import RentalPricing
from src.service.rental.domain.value_object.reservation_view import ReservationView


class ReturnBookUseCase:
    """
    Close an active reservation.

    The reservation row is locked for the duration of the unit of work, so a
    reservation is returned at most once even under concurrent requests.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, pricing: RentalPricing) -> None:
        self.uow = uow
        self.pricing = pricing
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        pricing: RentalPricing = Depends(Provide[Container.rental_pricing]),
    ) -> Self:
        return cls(uow=uow, pricing=pricing)

    @Logger.io
    async def execute(self, *, reservation_id: int, return_date: date) -> ReservationView:
        """
        Raises:
            NotFoundError: Unknown reservation
            ConflictError: Reservation already returned
        """
        with self.tracer.start_as_current_span(
            'use_case.return_book',
            attributes={'reservation.id': reservation_id},
        ) as span:
            async with self.uow:
                reservation = await self.uow.reservations.get_by_id_for_update(
                    reservation_id=reservation_id
                )
                if not reservation:
                    raise NotFoundError('Reservation not found')

                book = await self.uow.books.get_by_external_id(
                    external_id=reservation.book_external_id
                )
                if not book:
                    raise NotFoundError('Book not found')
                user = await self.uow.users.get_by_id(user_id=reservation.user_id)

                returned = reservation.mark_returned(
                    return_date=return_date, book_price=book.price, pricing=self.pricing
                )
                saved = await self.uow.reservations.update(reservation=returned)
                await self.uow.books.increase_available(external_id=reservation.book_external_id)
                await self.uow.commit()

            span.set_attribute('reservation.late', saved.late_fee is not None)

        metrics.record_return(late_fee=saved.late_fee)
        if saved.late_fee is not None:
            Logger.base.info(
                f'⏰ [RETURN-BOOK] reservation {reservation_id} returned '
                f'{reservation.days_late(return_date=return_date)} days late, '
                f'late_fee={saved.late_fee}'
            )
        else:
            Logger.base.info(f'✅ [RETURN-BOOK] reservation {reservation_id} returned on time')

        return ReservationView.of(
            reservation=saved,
            user_name=user.name if user else '',
            book_title=book.title,
        )
