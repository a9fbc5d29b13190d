from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import (
    ForbiddenError,
    NotFoundError,
    TransactionFailureError,
)
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_payment_provider import IPaymentProvider
from src.service.escrow.domain.entity.refund_entity import Refund


class IssueRefundUseCase:
    """
    Organizer-authorized refund of an order that has not been settled yet

    Payment, Escrow (when present), Ticket and Order all move to REFUNDED and
    an immutable Refund row is written; the provider refund runs last, before
    the commit.
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
    async def execute(
        self, *, order_id: UUID, organizer_id: int, reason: Optional[str] = None
    ) -> Refund:
        async with self.uow:
            aggregate = await self.uow.order_command_repo.get_aggregate_for_update(
                order_id=order_id
            )
            if not aggregate:
                raise NotFoundError('Order not found')

            organizer = await self.uow.users.get_by_id(user_id=organizer_id)
            if not organizer:
                raise NotFoundError('Organizer not found')
            if not organizer.is_organizer():
                raise ForbiddenError('Only organizers can issue refunds')

            refund = aggregate.refund(organizer_id=organizer.id, reason=reason)
            await self.uow.order_command_repo.apply_status_changes(
                changes=aggregate.status_changes
            )
            aggregate.clear_status_changes()
            refund = await self.uow.refund_command_repo.create(refund=refund)

            payment = aggregate.payment
            assert payment is not None
            result = await self.payment_provider.refund(
                provider_payment_id=payment.provider_payment_id,
                amount=payment.amount,
                currency=payment.currency,
            )
            if not result.success:
                raise TransactionFailureError(f'Payment refund failed: {result.message}')

            await self.uow.commit()

        Logger.base.info(
            f'↩️ [ISSUE_REFUND] order={order_id} amount={refund.amount} organizer={organizer_id}'
        )
        return refund
