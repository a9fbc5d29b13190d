from typing import List, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.escrow.domain.entity.refund_entity import Refund


class ListRefundsUseCase:
    def __init__(self, order_query_repo: IOrderQueryRepo):
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    async def list_refunds(self, order_id: UUID) -> List[Refund]:
        if not await self.order_query_repo.exists(order_id=order_id):
            raise NotFoundError('Order not found')

        return await self.order_query_repo.list_refunds(order_id=order_id)
