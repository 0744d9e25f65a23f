"""
API test fixtures

The DI container is overridden with in-memory repositories sharing one
RentalState, so requests exercise routing, validation, use cases and error
mapping without a database.
"""

from collections.abc import Generator
from datetime import date
from decimal import Decimal

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from test.service.rental.fakes import (
    InMemoryReservationQueryRepo,
    InMemoryUnitOfWork,
    RentalState,
)
from test.service.rental.rental_test_constants import ALICE_ID, BOB_ID, DUNE_ID, SOLD_OUT_ID
from test.test_app import app


@pytest.fixture
def rental_state() -> RentalState:
    state = RentalState()
    state.add_user(id=ALICE_ID, name='Alice')
    state.add_user(id=BOB_ID, name='Bob')
    state.add_book(external_id=DUNE_ID, title='Dune', price=Decimal('15.99'), stock_quantity=2)
    state.add_book(
        external_id=SOLD_OUT_ID,
        title='Sold Out',
        price=Decimal('9.99'),
        stock_quantity=1,
        available_quantity=0,
    )
    return state


@pytest.fixture
def client(rental_state: RentalState) -> Generator[TestClient, None, None]:
    container.unit_of_work.override(providers.Factory(InMemoryUnitOfWork, state=rental_state))
    container.reservation_query_repo.override(
        providers.Object(InMemoryReservationQueryRepo(rental_state))
    )
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        container.unit_of_work.reset_override()
        container.reservation_query_repo.reset_override()


@pytest.fixture
def create_reservation(client: TestClient):
    def _create(
        *,
        user_id: int = ALICE_ID,
        book_external_id: int = DUNE_ID,
        rental_days: int = 5,
        start_date: date = date(2025, 1, 10),
    ):
        return client.post(
            '/api/reservations',
            json={
                'user_id': user_id,
                'book_external_id': book_external_id,
                'rental_days': rental_days,
                'start_date': start_date.isoformat(),
            },
        )

    return _create
