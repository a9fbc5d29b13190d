from abc import ABC, abstractmethod

from src.service.escrow.domain.entity.refund_entity import Refund


class IRefundCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, refund: Refund) -> Refund:
        pass
