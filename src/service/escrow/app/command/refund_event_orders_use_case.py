from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.command.issue_refund_use_case import IssueRefundUseCase
from src.service.escrow.app.dto.event_refund_dto import EventRefundResult, FailedOrderRefund
from src.service.escrow.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.escrow.app.interface.i_payment_provider import IPaymentProvider
from src.service.escrow.domain.entity.refund_entity import Refund


class RefundEventOrdersUseCase:
    """
    Refund every order of an event the organizer cancels

    Flow:
    1. Ownership: the organizer must own at least one ticket of the event
    2. Collect the event's orders still holding funds (status PAID)
    3. Refund each through IssueRefundUseCase in its own unit of work; a failing
       order is reported and the rest carry on
    """

    def __init__(
        self,
        *,
        order_query_repo: IOrderQueryRepo,
        uow_factory: Callable[[], AbstractUnitOfWork],
        payment_provider: IPaymentProvider,
    ) -> None:
        self.order_query_repo = order_query_repo
        self.uow_factory = uow_factory
        self.payment_provider = payment_provider

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        payment_provider: IPaymentProvider = Depends(Provide[Container.payment_provider]),
    ) -> Self:
        return cls(
            order_query_repo=order_query_repo,
            uow_factory=uow_factory,
            payment_provider=payment_provider,
        )

    @Logger.io
    async def execute(
        self, *, event_id: int, organizer_id: int, reason: Optional[str] = None
    ) -> EventRefundResult:
        if not await self.order_query_repo.organizer_owns_event(
            event_id=event_id, organizer_id=organizer_id
        ):
            raise ForbiddenError("You don't have permission to refund orders for this event")

        order_ids = await self.order_query_repo.list_refundable_order_ids(event_id=event_id)
        if not order_ids:
            Logger.base.info(f'↩️ [EVENT_REFUND] event={event_id} has no orders to refund')
            return EventRefundResult.empty(event_id)

        reason = reason or f'Event {event_id} has been cancelled'
        refunded: List[Refund] = []
        failed: List[FailedOrderRefund] = []
        for order_id in order_ids:
            use_case = IssueRefundUseCase(
                uow=self.uow_factory(), payment_provider=self.payment_provider
            )
            try:
                refund = await use_case.execute(
                    order_id=order_id, organizer_id=organizer_id, reason=reason
                )
            except CustomBaseError as e:
                failed.append(FailedOrderRefund(order_id=order_id, detail=e.message, kind=e.kind))
                continue
            refunded.append(refund)

        result = EventRefundResult(event_id=event_id, refunded=refunded, failed=failed)
        Logger.base.info(
            f'↩️ [EVENT_REFUND] event={event_id} refunded={len(refunded)} '
            f'failed={len(failed)} amount={result.total_amount}'
        )
        return result
