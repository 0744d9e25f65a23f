from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import AvailabilityError, ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_book_catalog import IBookCatalog
from src.service.rental.domain.entity.book_entity import Book
from src.service.rental.driven_adapter.model.book_model import BookModel


class BookCatalogImpl(IBookCatalog):
    """
    Availability changes are single conditional UPDATE ... RETURNING
    statements, so concurrent rentals can never push the counter outside
    [0, stock_quantity].
    """

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_book: BookModel) -> Book:
        return Book(
            external_id=db_book.external_id,
            title=db_book.title,
            author=db_book.author,
            price=db_book.price,
            stock_quantity=db_book.stock_quantity,
            available_quantity=db_book.available_quantity,
        )

    @Logger.io
    async def get_by_external_id(self, *, external_id: int) -> Book | None:
        result = await self.session.execute(
            select(BookModel).where(BookModel.external_id == external_id)
        )
        db_book = result.scalar_one_or_none()

        if not db_book:
            return None

        return self._to_entity(db_book)

    @Logger.io
    async def decrease_available(self, *, external_id: int) -> Book:
        result = await self.session.execute(
            update(BookModel)
            .where(BookModel.external_id == external_id, BookModel.available_quantity > 0)
            .values(available_quantity=BookModel.available_quantity - 1)
            .returning(BookModel)
            .execution_options(populate_existing=True)
        )
        db_book = result.scalar_one_or_none()

        if not db_book:
            raise AvailabilityError(f'No copies available for book {external_id}')

        return self._to_entity(db_book)

    @Logger.io
    async def increase_available(self, *, external_id: int) -> Book:
        result = await self.session.execute(
            update(BookModel)
            .where(
                BookModel.external_id == external_id,
                BookModel.available_quantity < BookModel.stock_quantity,
            )
            .values(available_quantity=BookModel.available_quantity + 1)
            .returning(BookModel)
            .execution_options(populate_existing=True)
        )
        db_book = result.scalar_one_or_none()

        if not db_book:
            raise ConflictError(f'All copies of book {external_id} are already available')

        return self._to_entity(db_book)
