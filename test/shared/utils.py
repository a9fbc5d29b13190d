from typing import Any, Dict
from uuid import UUID

from sqlalchemy import select, update

from src.platform.database.orm_db_setting import get_session_maker
from src.service.escrow.domain.enum import TicketStatus, UserRole
from src.service.escrow.driven_adapter.model import (
    EscrowModel,
    OrderModel,
    PaymentModel,
    RefundModel,
    TicketModel,
    UserModel,
)


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


async def create_user(*, email: str, name: str, role: UserRole) -> Dict[str, Any]:
    async with get_session_maker()() as session:
        user = UserModel(email=email, name=name, role=role.value)
        session.add(user)
        await session.commit()
        return {'id': user.id, 'email': email, 'name': name, 'role': role.value}


async def create_ticket(
    *,
    event_id: int,
    organizer_id: int,
    price: int,
    status: TicketStatus = TicketStatus.AVAILABLE,
) -> Dict[str, Any]:
    async with get_session_maker()() as session:
        ticket = TicketModel(
            event_id=event_id, organizer_id=organizer_id, price=price, status=status.value
        )
        session.add(ticket)
        await session.commit()
        return {
            'id': ticket.id,
            'event_id': event_id,
            'organizer_id': organizer_id,
            'price': price,
            'status': status.value,
        }


async def validate_ticket(ticket_id: int) -> None:
    """Stand-in for the venue check-in system: sold → validated"""
    async with get_session_maker()() as session:
        await session.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.status == TicketStatus.SOLD.value)
            .values(status=TicketStatus.VALIDATED.value)
        )
        await session.commit()


async def get_ticket_status(ticket_id: int) -> str:
    async with get_session_maker()() as session:
        result = await session.execute(
            select(TicketModel.status).where(TicketModel.id == ticket_id)
        )
        return result.scalar_one()


async def get_settlement_statuses(order_id: UUID) -> Dict[str, Any]:
    """Current status of every row of one order, read straight from the tables"""
    async with get_session_maker()() as session:
        order = (
            await session.execute(select(OrderModel).where(OrderModel.id == order_id))
        ).scalar_one()
        ticket_status = (
            await session.execute(
                select(TicketModel.status).where(TicketModel.id == order.ticket_id)
            )
        ).scalar_one()
        payment_status = (
            await session.execute(
                select(PaymentModel.status).where(PaymentModel.order_id == order_id)
            )
        ).scalar_one_or_none()
        escrow_status = (
            await session.execute(
                select(EscrowModel.status).where(EscrowModel.order_id == order_id)
            )
        ).scalar_one_or_none()
        refund_count = len(
            (
                await session.execute(
                    select(RefundModel.id).where(RefundModel.order_id == order_id)
                )
            ).all()
        )
        return {
            'order': order.status,
            'ticket': ticket_status,
            'payment': payment_status,
            'escrow': escrow_status,
            'refunds': refund_count,
        }


async def count_rows(model) -> int:
    async with get_session_maker()() as session:
        result = await session.execute(select(model))
        return len(result.scalars().all())
