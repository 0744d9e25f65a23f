from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.config.business_config import RentalLimits
from src.platform.exception.exceptions import ConflictError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.rental.domain.enum.reservation_status import ReservationStatus
from src.service.rental.domain.value_object.rental_pricing import RentalPricing


@attrs.define
class Reservation:
    user_id: int
    book_external_id: int
    rental_days: int
    start_date: date
    expected_return_date: date
    daily_rate: Decimal
    total_fee: Decimal
    status: ReservationStatus = ReservationStatus.ACTIVE
    actual_return_date: Optional[date] = None
    late_fee: Optional[Decimal] = None
    id: Optional[int] = None  # Only None before persistence
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        book_external_id: int,
        rental_days: int,
        start_date: date,
        book_price: Decimal,
        pricing: RentalPricing,
    ) -> 'Reservation':
        if rental_days < RentalLimits.MIN_RENTAL_DAYS:
            raise DomainError('Rental days must be at least 1')
        if rental_days > RentalLimits.MAX_RENTAL_DAYS:
            raise DomainError(f'Rental days cannot exceed {RentalLimits.MAX_RENTAL_DAYS}')

        daily_rate = pricing.daily_rate(price=book_price)
        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            book_external_id=book_external_id,
            rental_days=rental_days,
            start_date=start_date,
            expected_return_date=start_date + timedelta(days=rental_days),
            daily_rate=daily_rate,
            total_fee=pricing.total_fee(daily_rate=daily_rate, rental_days=rental_days),
            status=ReservationStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    def days_late(self, *, return_date: date) -> int:
        return max((return_date - self.expected_return_date).days, 0)

    @Logger.io
    def mark_returned(
        self, *, return_date: date, book_price: Decimal, pricing: RentalPricing
    ) -> 'Reservation':
        """
        Close the rental. A late fee is charged only when the book comes back
        after the expected return date; otherwise late_fee stays None.

        Raises:
            ConflictError: When the reservation is already returned
        """
        if self.status == ReservationStatus.RETURNED:
            raise ConflictError('Reservation already returned')

        days_late = self.days_late(return_date=return_date)
        late_fee = pricing.late_fee(price=book_price, days_late=days_late) if days_late else None

        return attrs.evolve(
            self,
            status=ReservationStatus.RETURNED,
            actual_return_date=return_date,
            late_fee=late_fee,
            updated_at=datetime.now(timezone.utc),
        )
