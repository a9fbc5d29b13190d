from datetime import datetime, timezone
import random
import string
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.enum.payment_status import PAYMENT_TRANSITIONS, PaymentStatus


def generate_provider_payment_id() -> str:
    return f'PAY_MOCK_{"".join(random.choices(string.ascii_uppercase + string.digits, k=8))}'


@attrs.define
class Payment:
    id: UUID
    order_id: UUID
    provider_payment_id: str
    amount: int
    currency: str
    status: PaymentStatus = PaymentStatus.INITIATED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, order_id: UUID, amount: int, currency: str) -> 'Payment':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            order_id=order_id,
            provider_payment_id=generate_provider_payment_id(),
            amount=amount,
            currency=currency,
            status=PaymentStatus.INITIATED,
            created_at=now,
            updated_at=now,
        )

    def _transition(self, target: PaymentStatus) -> 'Payment':
        return attrs.evolve(
            self,
            status=PAYMENT_TRANSITIONS.check(self.status, target),
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def mark_as_held(self) -> 'Payment':
        return self._transition(PaymentStatus.HELD)

    @Logger.io
    def mark_as_captured(self) -> 'Payment':
        return self._transition(PaymentStatus.CAPTURED)

    @Logger.io
    def mark_as_refunded(self) -> 'Payment':
        return self._transition(PaymentStatus.REFUNDED)
