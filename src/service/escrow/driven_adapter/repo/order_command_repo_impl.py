"""
Order Command Repository Implementation

All reads take row locks (`SELECT ... FOR UPDATE`, a no-op on SQLite where the
whole transaction already started with BEGIN IMMEDIATE) and every status write
is a conditional UPDATE on the status the aggregate last saw.
"""

from typing import List, Optional, Type, Union
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.escrow.domain.aggregate.order_aggregate import (
    AggregatePart,
    OrderAggregate,
    StatusChange,
)
from src.service.escrow.domain.enum.escrow_status import EscrowStatus
from src.service.escrow.driven_adapter.model import (
    EscrowModel,
    OrderModel,
    PaymentModel,
    TicketModel,
)
from src.service.escrow.driven_adapter.repo.model_mapper import to_aggregate


_PART_MODELS: dict[
    AggregatePart, Type[Union[TicketModel, OrderModel, PaymentModel, EscrowModel]]
] = {
    AggregatePart.TICKET: TicketModel,
    AggregatePart.ORDER: OrderModel,
    AggregatePart.PAYMENT: PaymentModel,
    AggregatePart.ESCROW: EscrowModel,
}


class OrderCommandRepoImpl(IOrderCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, aggregate: OrderAggregate) -> None:
        # Ticket reservation first: losing a race must fail before any insert
        await self.apply_status_changes(changes=aggregate.status_changes)
        aggregate.clear_status_changes()

        order = aggregate.order
        self.session.add(
            OrderModel(
                id=order.id,
                buyer_id=order.buyer_id,
                ticket_id=order.ticket_id,
                amount=order.amount,
                status=order.status.value,
                idempotency_key=order.idempotency_key,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
        )
        await self.session.flush()

        if aggregate.payment is not None:
            payment = aggregate.payment
            self.session.add(
                PaymentModel(
                    id=payment.id,
                    order_id=payment.order_id,
                    provider_payment_id=payment.provider_payment_id,
                    amount=payment.amount,
                    currency=payment.currency,
                    status=payment.status.value,
                    created_at=payment.created_at,
                    updated_at=payment.updated_at,
                )
            )
        if aggregate.escrow is not None:
            escrow = aggregate.escrow
            self.session.add(
                EscrowModel(
                    id=escrow.id,
                    order_id=escrow.order_id,
                    beneficiary_id=escrow.beneficiary_id,
                    amount=escrow.amount,
                    status=escrow.status.value,
                    released_at=escrow.released_at,
                    created_at=escrow.created_at,
                    updated_at=escrow.updated_at,
                )
            )
        await self.session.flush()

        Logger.base.info(
            f'🧾 [CREATE_ORDER] order={order.id} ticket={order.ticket_id} amount={order.amount}'
        )

    @Logger.io
    async def get_aggregate_for_update(self, *, order_id: UUID) -> Optional[OrderAggregate]:
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == order_id).with_for_update()
        )
        db_order = result.scalar_one_or_none()
        if not db_order:
            return None

        return await self._load_aggregate(db_order)

    @Logger.io
    async def get_aggregate_by_idempotency_key(
        self, *, buyer_id: int, idempotency_key: str
    ) -> Optional[OrderAggregate]:
        result = await self.session.execute(
            select(OrderModel)
            .where(
                OrderModel.buyer_id == buyer_id,
                OrderModel.idempotency_key == idempotency_key,
            )
            .with_for_update()
        )
        db_order = result.scalar_one_or_none()
        if not db_order:
            return None

        return await self._load_aggregate(db_order)

    @Logger.io
    async def apply_status_changes(self, *, changes: List[StatusChange]) -> None:
        for change in changes:
            model = _PART_MODELS[change.part]
            values: dict = {'status': change.to_status, 'updated_at': change.changed_at}
            if change.part == AggregatePart.ESCROW and change.to_status == EscrowStatus.RELEASED:
                values['released_at'] = change.changed_at

            result = await self.session.execute(
                update(model)
                .where(model.id == change.entity_id, model.status == change.from_status)
                .values(**values)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount != 1:  # type: ignore[attr-defined]
                Logger.base.warning(
                    f'⚠️ [GUARDED_UPDATE] {change.part} {change.entity_id} '
                    f'is no longer {change.from_status}'
                )
                raise InvalidStateError(
                    f'{change.part.capitalize()} {change.entity_id} is no longer '
                    f'{change.from_status}; it was modified concurrently'
                )

    async def _load_aggregate(self, db_order: OrderModel) -> OrderAggregate:
        ticket_result = await self.session.execute(
            select(TicketModel).where(TicketModel.id == db_order.ticket_id).with_for_update()
        )
        payment_result = await self.session.execute(
            select(PaymentModel).where(PaymentModel.order_id == db_order.id).with_for_update()
        )
        escrow_result = await self.session.execute(
            select(EscrowModel).where(EscrowModel.order_id == db_order.id).with_for_update()
        )

        return to_aggregate(
            db_order=db_order,
            db_ticket=ticket_result.scalar_one(),
            db_payment=payment_result.scalar_one_or_none(),
            db_escrow=escrow_result.scalar_one_or_none(),
        )
