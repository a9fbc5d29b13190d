from datetime import datetime, timezone
from enum import StrEnum
from typing import List, Optional, Union
from uuid import UUID

import attrs

from src.platform.exception.exceptions import ForbiddenError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.entity.escrow_entity import Escrow
from src.service.escrow.domain.entity.order_entity import Order
from src.service.escrow.domain.entity.payment_entity import Payment
from src.service.escrow.domain.entity.refund_entity import Refund
from src.service.escrow.domain.entity.ticket_entity import Ticket
from src.service.escrow.domain.entity.user_entity import User
from src.service.escrow.domain.enum.escrow_status import EscrowStatus
from src.service.escrow.domain.enum.order_status import OrderStatus
from src.service.escrow.domain.enum.payment_status import PaymentStatus


class AggregatePart(StrEnum):
    TICKET = 'ticket'
    ORDER = 'order'
    PAYMENT = 'payment'
    ESCROW = 'escrow'


@attrs.frozen
class StatusChange:
    """A status write on an already persisted row, guarded by `from_status`"""

    part: AggregatePart
    entity_id: Union[int, UUID]
    from_status: str
    to_status: str
    changed_at: datetime


@attrs.define
class OrderAggregate:
    """
    Order aggregate root

    Owns the Payment and Escrow of one Order (by order id reference) and carries
    the Ticket the order was placed for. Every operation validates all of its
    preconditions before touching any part, then moves the parts together and
    records one StatusChange per persisted row it changed.
    """

    order: Order
    ticket: Ticket
    payment: Optional[Payment] = None
    escrow: Optional[Escrow] = None
    _status_changes: List[StatusChange] = attrs.field(factory=list, init=False)

    @classmethod
    @Logger.io
    def place(
        cls,
        *,
        buyer: User,
        ticket: Ticket,
        amount: int,
        currency: str,
        idempotency_key: Optional[str] = None,
    ) -> 'OrderAggregate':
        if not buyer.is_buyer():
            raise ForbiddenError('Only buyers can create orders')

        ticket.ensure_available()

        order = Order.create(
            buyer_id=buyer.id,
            ticket_id=ticket.id,
            amount=amount,
            idempotency_key=idempotency_key,
        )
        if amount != ticket.price:
            raise InvalidStateError(
                f'Order amount {amount} does not match ticket price {ticket.price}'
            )

        aggregate = cls(order=order.mark_as_paid(), ticket=ticket)
        aggregate.payment = Payment.create(
            order_id=order.id, amount=amount, currency=currency
        ).mark_as_held()
        aggregate.escrow = Escrow.create(
            order_id=order.id, beneficiary_id=ticket.organizer_id, amount=amount
        )
        aggregate._change_ticket(ticket.mark_as_sold())
        return aggregate

    @Logger.io
    def release(self) -> None:
        if self.escrow is None:
            raise InvalidStateError(f'Order {self.order.id} has no escrow')
        self.escrow.ensure_holding()
        if not self.ticket.is_validated():
            raise InvalidStateError(
                f'Ticket {self.ticket.id} has not been validated (status: {self.ticket.status})'
            )
        if self.payment is None:
            raise InvalidStateError(f'Order {self.order.id} has no payment')

        payment = self.payment.mark_as_captured()
        escrow = self.escrow.mark_as_released()
        order = self.order.mark_as_released()

        self._change_payment(payment)
        self._change_escrow(escrow)
        self._change_order(order)

    @Logger.io
    def refund(self, *, organizer_id: int, reason: Optional[str] = None) -> Refund:
        if organizer_id != self.ticket.organizer_id:
            raise ForbiddenError('Only the organizer of this ticket can issue a refund')
        if self.order.status == OrderStatus.REFUNDED:
            raise InvalidStateError(f'Order {self.order.id} has already been refunded')
        if self.payment is None:
            raise InvalidStateError(f'Order {self.order.id} has no payment')
        if self.payment.status == PaymentStatus.REFUNDED:
            raise InvalidStateError('Payment has already been refunded')
        if self.escrow is not None and self.escrow.status == EscrowStatus.RELEASED:
            raise InvalidStateError('Escrow has already been released to the organizer')

        payment = self.payment.mark_as_refunded()
        escrow = self.escrow.mark_as_refunded() if self.escrow is not None else None
        ticket = self.ticket.mark_as_refunded()
        order = self.order.mark_as_refunded()

        self._change_payment(payment)
        if escrow is not None:
            self._change_escrow(escrow)
        self._change_ticket(ticket)
        self._change_order(order)

        return Refund.issue(
            order_id=self.order.id,
            issued_by=organizer_id,
            amount=payment.amount,
            reason=reason,
        )

    @property
    def status_changes(self) -> List[StatusChange]:
        return list(self._status_changes)

    def clear_status_changes(self) -> None:
        self._status_changes.clear()

    def _record(
        self, part: AggregatePart, entity_id: Union[int, UUID], before: str, after: str
    ) -> None:
        self._status_changes.append(
            StatusChange(
                part=part,
                entity_id=entity_id,
                from_status=before,
                to_status=after,
                changed_at=datetime.now(timezone.utc),
            )
        )

    def _change_ticket(self, ticket: Ticket) -> None:
        self._record(AggregatePart.TICKET, ticket.id, self.ticket.status, ticket.status)
        self.ticket = ticket

    def _change_order(self, order: Order) -> None:
        self._record(AggregatePart.ORDER, order.id, self.order.status, order.status)
        self.order = order

    def _change_payment(self, payment: Payment) -> None:
        assert self.payment is not None
        self._record(AggregatePart.PAYMENT, payment.id, self.payment.status, payment.status)
        self.payment = payment

    def _change_escrow(self, escrow: Escrow) -> None:
        assert self.escrow is not None
        self._record(AggregatePart.ESCROW, escrow.id, self.escrow.status, escrow.status)
        self.escrow = escrow
