from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.enum.order_status import ORDER_TRANSITIONS, OrderStatus


@attrs.define
class Order:
    id: UUID
    buyer_id: int
    ticket_id: int
    amount: int
    status: OrderStatus = OrderStatus.PENDING
    idempotency_key: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        buyer_id: int,
        ticket_id: int,
        amount: int,
        idempotency_key: Optional[str] = None,
    ) -> 'Order':
        if amount <= 0:
            raise InvalidStateError('Order amount must be positive')

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            buyer_id=buyer_id,
            ticket_id=ticket_id,
            amount=amount,
            status=OrderStatus.PENDING,
            idempotency_key=idempotency_key,
            created_at=now,
            updated_at=now,
        )

    def _transition(self, target: OrderStatus) -> 'Order':
        return attrs.evolve(
            self,
            status=ORDER_TRANSITIONS.check(self.status, target),
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def mark_as_paid(self) -> 'Order':
        return self._transition(OrderStatus.PAID)

    @Logger.io
    def mark_as_released(self) -> 'Order':
        return self._transition(OrderStatus.RELEASED)

    @Logger.io
    def mark_as_refunded(self) -> 'Order':
        return self._transition(OrderStatus.REFUNDED)

    def matches_request(self, *, ticket_id: int, amount: int) -> bool:
        return self.ticket_id == ticket_id and self.amount == amount
