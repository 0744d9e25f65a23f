"""
Book Catalog Interface

Availability counters are only ever changed through the atomic
decrease/increase operations below.
"""

from abc import ABC, abstractmethod

from src.service.rental.domain.entity.book_entity import Book


class IBookCatalog(ABC):
    @abstractmethod
    async def get_by_external_id(self, *, external_id: int) -> Book | None:
        pass

    @abstractmethod
    async def decrease_available(self, *, external_id: int) -> Book:
        """
        Take one copy off the shelf.

        Raises:
            AvailabilityError: When no copy is left
        """
        pass

    @abstractmethod
    async def increase_available(self, *, external_id: int) -> Book:
        """
        Put one copy back. Never exceeds stock_quantity.

        Raises:
            ConflictError: When every copy is already on the shelf
        """
        pass
