"""
Unit of Work Pattern - one database session and transaction per command

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories get the shared session from the UoW
- Use cases coordinate several repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.rental.app.interface.i_book_catalog import IBookCatalog
    from src.service.rental.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.rental.app.interface.i_user_directory import IUserDirectory


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Rental Service

    Usage:
        async with uow:
            reservation = await uow.reservations.create(reservation=...)
            await uow.books.decrease_available(external_id=...)
            await uow.commit()

    Leaving the block without commit rolls everything back.
    """

    users: IUserDirectory
    books: IBookCatalog
    reservations: IReservationCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory
        self._session_cm: AsyncContextManager[AsyncSession] | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self):
        from src.service.rental.driven_adapter.repo.book_catalog_impl import BookCatalogImpl
        from src.service.rental.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.rental.driven_adapter.repo.user_directory_impl import (
            UserDirectoryImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories share the UoW session
        self.users = UserDirectoryImpl(session=self.session)
        self.books = BookCatalogImpl(session=self.session)
        self.reservations = ReservationCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self):
        assert self.session is not None, 'commit() called outside of `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
