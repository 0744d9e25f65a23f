import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from test.service.rental.rental_test_constants import ALICE_ID


@pytest.mark.integration
class TestUserDirectoryImpl:
    async def test_get_by_id(self, uow: SqlAlchemyUnitOfWork):
        async with uow:
            user = await uow.users.get_by_id(user_id=ALICE_ID)

        assert user is not None
        assert user.id == ALICE_ID
        assert user.name == 'Alice'
        assert user.email == 'alice@library.test'

    async def test_unknown_user_returns_none(self, uow: SqlAlchemyUnitOfWork):
        async with uow:
            assert await uow.users.get_by_id(user_id=9999) is None
