from abc import ABC, abstractmethod

from src.service.rental.domain.entity.user_entity import UserEntity


class IUserDirectory(ABC):
    """Resolves library members. Read-only: the rental core never edits users."""

    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        pass
