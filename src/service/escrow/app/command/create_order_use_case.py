from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate


class CreateOrderUseCase:
    """
    Create an order for one ticket and put the buyer's money in escrow

    Flow (one transaction):
    1. Replay check: same buyer + idempotency key returns the earlier order
    2. Lock the ticket and validate buyer / availability / amount
    3. Ticket AVAILABLE → SOLD (guarded), insert Order(PAID) + Payment(HELD) + Escrow(HOLDING)
    4. Commit
    """

    def __init__(self, *, uow: AbstractUnitOfWork, settings: Settings) -> None:
        self.uow = uow
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, settings=settings)

    @Logger.io
    async def execute(
        self,
        *,
        buyer_id: int,
        ticket_id: int,
        amount: int,
        idempotency_key: Optional[str] = None,
    ) -> OrderAggregate:
        async with self.uow:
            if idempotency_key:
                existing = await self.uow.order_command_repo.get_aggregate_by_idempotency_key(
                    buyer_id=buyer_id, idempotency_key=idempotency_key
                )
                if existing:
                    if not existing.order.matches_request(ticket_id=ticket_id, amount=amount):
                        raise InvalidStateError(
                            'Idempotency key was already used for a different order request'
                        )
                    Logger.base.info(
                        f'🔁 [CREATE_ORDER] Replayed idempotency key for order {existing.order.id}'
                    )
                    return existing

            buyer = await self.uow.users.get_by_id(user_id=buyer_id)
            if not buyer:
                raise NotFoundError('Buyer not found')

            ticket = await self.uow.ticket_command_repo.get_for_update(ticket_id=ticket_id)
            if not ticket:
                raise NotFoundError('Ticket not found')

            aggregate = OrderAggregate.place(
                buyer=buyer,
                ticket=ticket,
                amount=amount,
                currency=self.settings.PAYMENT_CURRENCY,
                idempotency_key=idempotency_key,
            )
            await self.uow.order_command_repo.create(aggregate=aggregate)
            await self.uow.commit()

        return aggregate
