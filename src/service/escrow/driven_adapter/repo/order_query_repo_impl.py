from typing import AsyncContextManager, Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate
from src.service.escrow.domain.entity.refund_entity import Refund
from src.service.escrow.domain.enum.order_status import OrderStatus
from src.service.escrow.driven_adapter.model import (
    EscrowModel,
    OrderModel,
    PaymentModel,
    RefundModel,
    TicketModel,
)
from src.service.escrow.driven_adapter.repo.model_mapper import refund_to_entity, to_aggregate


class OrderQueryRepoImpl(IOrderQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_order_with_details(self, *, order_id: UUID) -> Optional[OrderAggregate]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderModel, TicketModel, PaymentModel, EscrowModel)
                .join(TicketModel, TicketModel.id == OrderModel.ticket_id)
                .outerjoin(PaymentModel, PaymentModel.order_id == OrderModel.id)
                .outerjoin(EscrowModel, EscrowModel.order_id == OrderModel.id)
                .where(OrderModel.id == order_id)
            )
            row = result.one_or_none()

            if not row:
                return None

            db_order, db_ticket, db_payment, db_escrow = row
            return to_aggregate(
                db_order=db_order,
                db_ticket=db_ticket,
                db_payment=db_payment,
                db_escrow=db_escrow,
            )

    @Logger.io
    async def exists(self, *, order_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(select(OrderModel.id).where(OrderModel.id == order_id))
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def list_refunds(self, *, order_id: UUID) -> List[Refund]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(RefundModel)
                .where(RefundModel.order_id == order_id)
                .order_by(RefundModel.created_at, RefundModel.id)
            )
            return [refund_to_entity(db_refund) for db_refund in result.scalars().all()]

    @Logger.io
    async def organizer_owns_event(self, *, event_id: int, organizer_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel.id)
                .where(TicketModel.event_id == event_id, TicketModel.organizer_id == organizer_id)
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def list_refundable_order_ids(self, *, event_id: int) -> List[UUID]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OrderModel.id)
                .join(TicketModel, TicketModel.id == OrderModel.ticket_id)
                .where(
                    TicketModel.event_id == event_id,
                    OrderModel.status == OrderStatus.PAID.value,
                )
                .order_by(OrderModel.created_at, OrderModel.id)
            )
            return list(result.scalars().all())

    @Logger.io
    async def list_event_refunds(self, *, event_id: int) -> List[Refund]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(RefundModel)
                .join(OrderModel, OrderModel.id == RefundModel.order_id)
                .join(TicketModel, TicketModel.id == OrderModel.ticket_id)
                .where(TicketModel.event_id == event_id)
                .order_by(RefundModel.created_at.desc(), RefundModel.id.desc())
            )
            return [refund_to_entity(db_refund) for db_refund in result.scalars().all()]
