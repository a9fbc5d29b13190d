from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate


class GetOrderUseCase:
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
    async def get_order(self, order_id: UUID) -> OrderAggregate:
        aggregate = await self.order_query_repo.get_order_with_details(order_id=order_id)

        if not aggregate:
            raise NotFoundError('Order not found')

        return aggregate
