from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.rental.domain.entity.book_entity import Book
from src.service.rental.domain.entity.reservation_entity import Reservation
from src.service.rental.domain.entity.user_entity import UserEntity
from src.service.rental.domain.enum.reservation_status import ReservationStatus


@attrs.define(frozen=True)
class ReservationView:
    """Reservation enriched with the member name and book title, as returned to callers."""

    id: int
    user_id: int
    user_name: str
    book_external_id: int
    book_title: str
    rental_days: int
    start_date: date
    expected_return_date: date
    daily_rate: Decimal
    total_fee: Decimal
    status: ReservationStatus
    actual_return_date: Optional[date] = None
    late_fee: Optional[Decimal] = None
    created_at: Optional[datetime] = None

    @classmethod
    def of(cls, *, reservation: Reservation, user_name: str, book_title: str) -> 'ReservationView':
        assert reservation.id is not None, 'Reservation must be persisted before viewing'
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            user_name=user_name,
            book_external_id=reservation.book_external_id,
            book_title=book_title,
            rental_days=reservation.rental_days,
            start_date=reservation.start_date,
            expected_return_date=reservation.expected_return_date,
            daily_rate=reservation.daily_rate,
            total_fee=reservation.total_fee,
            status=reservation.status,
            actual_return_date=reservation.actual_return_date,
            late_fee=reservation.late_fee,
            created_at=reservation.created_at,
        )

    @classmethod
    def from_entities(
        cls, *, reservation: Reservation, user: UserEntity, book: Book
    ) -> 'ReservationView':
        return cls.of(reservation=reservation, user_name=user.name, book_title=book.title)
