from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.escrow.domain.entity.user_entity import User
from src.service.escrow.driven_adapter.model.user_model import UserModel
from src.service.escrow.driven_adapter.repo.model_mapper import user_to_entity


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[User]:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        user_model = result.scalar_one_or_none()

        if not user_model:
            return None

        return user_to_entity(user_model)
