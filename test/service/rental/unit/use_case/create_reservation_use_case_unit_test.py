"""
Unit tests for CreateReservationUseCase

Focus:
1. Pricing: daily_rate frozen from the book price, total_fee rounded half-up
2. Fail fast: unknown user/book, no copies left → no write, no counter change
3. Ordering: reservation persisted before availability is decremented, one commit
4. Metrics: every outcome lands in one result label (created/unavailable/rejected)
"""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, call

import pytest

from src.platform.exception.exceptions import AvailabilityError, DomainError, NotFoundError
from src.service.rental.app.command.create_reservation_use_case import CreateReservationUseCase
from src.service.rental.domain.enum.reservation_status import ReservationStatus
from src.service.rental.domain.value_object.rental_pricing import RentalPricing
from test.service.rental.unit.test_helpers import (
    TEST_BOOK_ID,
    TEST_BOOK_TITLE,
    TEST_RESERVATION_ID,
    TEST_USER_ID,
    TEST_USER_NAME,
    MockUnitOfWork,
    make_book,
    make_user,
)


START = date(2025, 1, 10)


@pytest.mark.unit
class TestCreateReservation:
    async def _execute(self, uow: MockUnitOfWork, *, rental_days: int = 5):
        use_case = CreateReservationUseCase(uow=uow, pricing=RentalPricing())
        return await use_case.execute(
            user_id=TEST_USER_ID,
            book_external_id=TEST_BOOK_ID,
            rental_days=rental_days,
            start_date=START,
        )

    async def test_create_reservation_success(self):
        uow = MockUnitOfWork(user=make_user(), book=make_book())

        result = await self._execute(uow)

        assert result.id == TEST_RESERVATION_ID
        assert result.user_id == TEST_USER_ID
        assert result.user_name == TEST_USER_NAME
        assert result.book_external_id == TEST_BOOK_ID
        assert result.book_title == TEST_BOOK_TITLE
        assert result.status == ReservationStatus.ACTIVE
        assert result.daily_rate == Decimal('1.599')
        assert result.total_fee == Decimal('8.00')
        assert result.expected_return_date == date(2025, 1, 15)
        assert result.actual_return_date is None
        assert result.late_fee is None
        assert uow.committed

    async def test_reservation_is_persisted_before_availability_decrement(self):
        uow = MockUnitOfWork(user=make_user(), book=make_book())
        manager = MagicMock()
        manager.attach_mock(uow.reservations.create, 'create')
        manager.attach_mock(uow.books.decrease_available, 'decrease_available')

        await self._execute(uow)

        assert [name for name, _, _ in manager.mock_calls] == ['create', 'decrease_available']
        assert uow.books.decrease_available.await_args == call(external_id=TEST_BOOK_ID)

    async def test_user_not_found(self):
        uow = MockUnitOfWork(user=None, book=make_book())

        with pytest.raises(NotFoundError, match='User not found'):
            await self._execute(uow)

        uow.books.get_by_external_id.assert_not_awaited()
        uow.reservations.create.assert_not_awaited()
        assert not uow.committed

    async def test_book_not_found(self):
        uow = MockUnitOfWork(user=make_user(), book=None)

        with pytest.raises(NotFoundError, match='Book not found'):
            await self._execute(uow)

        uow.reservations.create.assert_not_awaited()
        uow.books.decrease_available.assert_not_awaited()
        assert not uow.committed

    async def test_create_reservation_not_available(self):
        uow = MockUnitOfWork(user=make_user(), book=make_book(available_quantity=0))

        with pytest.raises(AvailabilityError, match=f'No copies available for book {TEST_BOOK_ID}'):
            await self._execute(uow)

        uow.reservations.create.assert_not_awaited()
        uow.books.decrease_available.assert_not_awaited()
        assert not uow.committed

    async def test_invalid_rental_days_rejected_before_any_write(self):
        uow = MockUnitOfWork(user=make_user(), book=make_book())

        with pytest.raises(DomainError):
            await self._execute(uow, rental_days=0)

        uow.reservations.create.assert_not_awaited()
        uow.books.decrease_available.assert_not_awaited()

    async def test_failed_decrement_propagates_without_commit(self):
        uow = MockUnitOfWork(user=make_user(), book=make_book())
        uow.books.decrease_available.side_effect = AvailabilityError(
            f'No copies available for book {TEST_BOOK_ID}'
        )

        with pytest.raises(AvailabilityError):
            await self._execute(uow)

        assert not uow.committed


@pytest.mark.unit
class TestCreateReservationMetrics:
    @pytest.fixture
    def recorded(self, monkeypatch) -> MagicMock:
        fake_metrics = MagicMock()
        monkeypatch.setattr(
            'src.service.rental.app.command.create_reservation_use_case.metrics', fake_metrics
        )
        return fake_metrics.record_reservation

    async def _execute(self, uow: MockUnitOfWork, *, rental_days: int = 5):
        use_case = CreateReservationUseCase(uow=uow, pricing=RentalPricing())
        return await use_case.execute(
            user_id=TEST_USER_ID,
            book_external_id=TEST_BOOK_ID,
            rental_days=rental_days,
            start_date=START,
        )

    async def test_created_result_recorded(self, recorded: MagicMock):
        await self._execute(MockUnitOfWork(user=make_user(), book=make_book()))

        recorded.assert_called_once()
        assert recorded.call_args.kwargs['result'] == 'created'

    async def test_unavailable_result_recorded(self, recorded: MagicMock):
        with pytest.raises(AvailabilityError):
            await self._execute(
                MockUnitOfWork(user=make_user(), book=make_book(available_quantity=0))
            )

        recorded.assert_called_once()
        assert recorded.call_args.kwargs['result'] == 'unavailable'

    @pytest.mark.parametrize(
        'user_found,book_found,rental_days,expected_error',
        [
            (False, True, 5, NotFoundError),
            (True, False, 5, NotFoundError),
            (True, True, 0, DomainError),
        ],
    )
    async def test_rejected_result_recorded(
        self, recorded: MagicMock, user_found, book_found, rental_days, expected_error
    ):
        uow = MockUnitOfWork(
            user=make_user() if user_found else None,
            book=make_book() if book_found else None,
        )

        with pytest.raises(expected_error):
            await self._execute(uow, rental_days=rental_days)

        recorded.assert_called_once()
        assert recorded.call_args.kwargs['result'] == 'rejected'
        assert recorded.call_args.kwargs['duration'] >= 0
