from abc import ABC, abstractmethod

from src.service.escrow.domain.entity.user_entity import User


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> User | None:
        pass
