from datetime import date
import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import AvailabilityError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.rental_metrics import metrics
from src.service.rental.domain.entity.reservation_entity import Reservation
from src.service.rental.domain.value_object.rental_pricing import RentalPricing
from src.service.rental.domain.value_object.reservation_view import ReservationView


class CreateReservationUseCase:
    """
    Rent one copy of a book to a member.

    Flow (single unit of work):
    1. Resolve user and book
    2. Check availability (no write happens when the shelf is empty)
    3. Price the rental and insert the ACTIVE reservation
    4. Decrement the book's available quantity
    5. Commit
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
    async def execute(
        self,
        *,
        user_id: int,
        book_external_id: int,
        rental_days: int,
        start_date: date,
    ) -> ReservationView:
        """
        Raises:
            NotFoundError: Unknown user or book
            AvailabilityError: No copy of the book is available
            DomainError: rental_days out of range
        """
        started = time.perf_counter()
        try:
            with self.tracer.start_as_current_span(
                'use_case.create_reservation',
                attributes={
                    'reservation.user_id': user_id,
                    'reservation.book_external_id': book_external_id,
                    'reservation.rental_days': rental_days,
                },
            ) as span:
                async with self.uow:
                    user = await self.uow.users.get_by_id(user_id=user_id)
                    if not user:
                        raise NotFoundError('User not found')

                    book = await self.uow.books.get_by_external_id(external_id=book_external_id)
                    if not book:
                        raise NotFoundError('Book not found')

                    if not book.is_available:
                        raise AvailabilityError(
                            f'No copies available for book {book_external_id}'
                        )

                    reservation = Reservation.create(
                        user_id=user_id,
                        book_external_id=book_external_id,
                        rental_days=rental_days,
                        start_date=start_date,
                        book_price=book.price,
                        pricing=self.pricing,
                    )
                    saved = await self.uow.reservations.create(reservation=reservation)
                    await self.uow.books.decrease_available(external_id=book_external_id)
                    await self.uow.commit()

                span.set_attribute('reservation.id', str(saved.id))
        except AvailabilityError:
            metrics.record_reservation(result='unavailable', duration=time.perf_counter() - started)
            raise
        except (NotFoundError, DomainError):
            metrics.record_reservation(result='rejected', duration=time.perf_counter() - started)
            raise

        metrics.record_reservation(result='created', duration=time.perf_counter() - started)
        Logger.base.info(
            f'📚 [CREATE-RESERVATION] reservation {saved.id}: user {user_id} '
            f'rented book {book_external_id} for {rental_days} days, total_fee={saved.total_fee}'
        )
        return ReservationView.from_entities(reservation=saved, user=user, book=book)
