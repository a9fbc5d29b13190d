"""Conversions between SQLAlchemy models and domain entities"""

from typing import Optional

from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate
from src.service.escrow.domain.entity.escrow_entity import Escrow
from src.service.escrow.domain.entity.order_entity import Order
from src.service.escrow.domain.entity.payment_entity import Payment
from src.service.escrow.domain.entity.refund_entity import Refund
from src.service.escrow.domain.entity.ticket_entity import Ticket
from src.service.escrow.domain.entity.user_entity import User
from src.service.escrow.domain.enum import (
    EscrowStatus,
    OrderStatus,
    PaymentStatus,
    RefundStatus,
    TicketStatus,
    UserRole,
)
from src.service.escrow.driven_adapter.model import (
    EscrowModel,
    OrderModel,
    PaymentModel,
    RefundModel,
    TicketModel,
    UserModel,
)


def user_to_entity(db_user: UserModel) -> User:
    return User(
        id=db_user.id,
        email=db_user.email,
        name=db_user.name,
        role=UserRole(db_user.role),
        created_at=db_user.created_at,
    )


def ticket_to_entity(db_ticket: TicketModel) -> Ticket:
    return Ticket(
        id=db_ticket.id,
        event_id=db_ticket.event_id,
        organizer_id=db_ticket.organizer_id,
        price=db_ticket.price,
        status=TicketStatus(db_ticket.status),
        created_at=db_ticket.created_at,
        updated_at=db_ticket.updated_at,
    )


def order_to_entity(db_order: OrderModel) -> Order:
    return Order(
        id=db_order.id,
        buyer_id=db_order.buyer_id,
        ticket_id=db_order.ticket_id,
        amount=db_order.amount,
        status=OrderStatus(db_order.status),
        idempotency_key=db_order.idempotency_key,
        created_at=db_order.created_at,
        updated_at=db_order.updated_at,
    )


def payment_to_entity(db_payment: PaymentModel) -> Payment:
    return Payment(
        id=db_payment.id,
        order_id=db_payment.order_id,
        provider_payment_id=db_payment.provider_payment_id,
        amount=db_payment.amount,
        currency=db_payment.currency,
        status=PaymentStatus(db_payment.status),
        created_at=db_payment.created_at,
        updated_at=db_payment.updated_at,
    )


def escrow_to_entity(db_escrow: EscrowModel) -> Escrow:
    return Escrow(
        id=db_escrow.id,
        order_id=db_escrow.order_id,
        beneficiary_id=db_escrow.beneficiary_id,
        amount=db_escrow.amount,
        status=EscrowStatus(db_escrow.status),
        released_at=db_escrow.released_at,
        created_at=db_escrow.created_at,
        updated_at=db_escrow.updated_at,
    )


def refund_to_entity(db_refund: RefundModel) -> Refund:
    return Refund(
        id=db_refund.id,
        order_id=db_refund.order_id,
        issued_by=db_refund.issued_by,
        amount=db_refund.amount,
        status=RefundStatus(db_refund.status),
        reason=db_refund.reason,
        created_at=db_refund.created_at,
    )


def to_aggregate(
    *,
    db_order: OrderModel,
    db_ticket: TicketModel,
    db_payment: Optional[PaymentModel],
    db_escrow: Optional[EscrowModel],
) -> OrderAggregate:
    return OrderAggregate(
        order=order_to_entity(db_order),
        ticket=ticket_to_entity(db_ticket),
        payment=payment_to_entity(db_payment) if db_payment is not None else None,
        escrow=escrow_to_entity(db_escrow) if db_escrow is not None else None,
    )
