from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError, TransactionFailureError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_payment_provider import IPaymentProvider
from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate


class ReleaseEscrowUseCase:
    """
    Settle a validated ticket's escrow to the organizer

    Payment HELD → CAPTURED, Escrow HOLDING → RELEASED and Order PAID → RELEASED
    are written together, then the provider capture runs before the commit. A
    declined capture rolls the writes back.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, payment_provider: IPaymentProvider) -> None:
        self.uow = uow
        self.payment_provider = payment_provider

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        payment_provider: IPaymentProvider = Depends(Provide[Container.payment_provider]),
    ) -> Self:
        return cls(uow=uow, payment_provider=payment_provider)

    @Logger.io
    async def execute(self, *, order_id: UUID, triggered_by: Optional[str] = None) -> OrderAggregate:
        async with self.uow:
            aggregate = await self.uow.order_command_repo.get_aggregate_for_update(
                order_id=order_id
            )
            if not aggregate:
                raise NotFoundError('Order not found')

            aggregate.release()
            await self.uow.order_command_repo.apply_status_changes(
                changes=aggregate.status_changes
            )
            aggregate.clear_status_changes()

            payment = aggregate.payment
            assert payment is not None
            result = await self.payment_provider.capture(
                provider_payment_id=payment.provider_payment_id,
                amount=payment.amount,
                currency=payment.currency,
            )
            if not result.success:
                raise TransactionFailureError(f'Payment capture failed: {result.message}')

            await self.uow.commit()

        Logger.base.info(
            f'💰 [RELEASE_ESCROW] order={order_id} amount={payment.amount} '
            f'beneficiary={aggregate.ticket.organizer_id} triggered_by={triggered_by or "-"}'
        )
        return aggregate
