from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.escrow.domain.entity.refund_entity import Refund


class ListEventRefundsUseCase:
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
    async def list_event_refunds(self, *, event_id: int, organizer_id: int) -> List[Refund]:
        if not await self.order_query_repo.organizer_owns_event(
            event_id=event_id, organizer_id=organizer_id
        ):
            raise ForbiddenError("You don't have permission to view refunds for this event")

        return await self.order_query_repo.list_event_refunds(event_id=event_id)
