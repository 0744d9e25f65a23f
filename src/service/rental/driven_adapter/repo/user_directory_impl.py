from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.rental.app.interface.i_user_directory import IUserDirectory
from src.service.rental.domain.entity.user_entity import UserEntity
from src.service.rental.driven_adapter.model.user_model import UserModel


class UserDirectoryImpl(IUserDirectory):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> UserEntity | None:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        user_model = result.scalar_one_or_none()

        if not user_model:
            return None

        return UserEntity(id=user_model.id, name=user_model.name, email=user_model.email)
