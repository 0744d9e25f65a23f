"""
Integration test fixtures

Repositories run against a real SQLAlchemy engine (file-backed SQLite through
aiosqlite, one database per test) so the conditional UPDATE ... RETURNING
statements, joins and filters execute as written.
"""

from collections.abc import AsyncIterator
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.platform.database.orm_db_setting import Base
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.rental.driven_adapter.model import BookModel, UserModel
from src.service.rental.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from test.service.rental.rental_test_constants import (
    ALICE_ID,
    BOB_ID,
    DUNE_ID,
    EMMA_ID,
    SOLD_OUT_ID,
)


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f'sqlite+aiosqlite:///{tmp_path / "rental.db"}')
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            [
                UserModel(id=ALICE_ID, name='Alice', email='alice@library.test'),
                UserModel(id=BOB_ID, name='Bob', email='bob@library.test'),
                BookModel(
                    external_id=DUNE_ID,
                    title='Dune',
                    author='Frank Herbert',
                    price=Decimal('15.99'),
                    stock_quantity=2,
                    available_quantity=2,
                ),
                BookModel(
                    external_id=EMMA_ID,
                    title='Emma',
                    author='Jane Austen',
                    price=Decimal('12.00'),
                    stock_quantity=3,
                    available_quantity=3,
                ),
                BookModel(
                    external_id=SOLD_OUT_ID,
                    title='Sold Out',
                    price=Decimal('9.99'),
                    stock_quantity=1,
                    available_quantity=0,
                ),
            ]
        )
        await session.commit()
    return factory


@pytest.fixture
def uow(session_factory: async_sessionmaker[AsyncSession]) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=session_factory)


@pytest.fixture
def query_repo(session_factory: async_sessionmaker[AsyncSession]) -> ReservationQueryRepoImpl:
    return ReservationQueryRepoImpl(session_factory=session_factory)
