from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.enum.escrow_status import ESCROW_TRANSITIONS, EscrowStatus


@attrs.define
class Escrow:
    """Funds held by the platform until the ticket is validated or the order is refunded"""

    id: UUID
    order_id: UUID
    beneficiary_id: int
    amount: int
    status: EscrowStatus = EscrowStatus.HOLDING
    released_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, order_id: UUID, beneficiary_id: int, amount: int) -> 'Escrow':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            order_id=order_id,
            beneficiary_id=beneficiary_id,
            amount=amount,
            status=EscrowStatus.HOLDING,
            created_at=now,
            updated_at=now,
        )

    def ensure_holding(self) -> None:
        if self.status != EscrowStatus.HOLDING:
            raise InvalidStateError(f'Escrow is not holding funds (status: {self.status})')

    @Logger.io
    def mark_as_released(self) -> 'Escrow':
        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=ESCROW_TRANSITIONS.check(self.status, EscrowStatus.RELEASED),
            released_at=now,
            updated_at=now,
        )

    @Logger.io
    def mark_as_refunded(self) -> 'Escrow':
        return attrs.evolve(
            self,
            status=ESCROW_TRANSITIONS.check(self.status, EscrowStatus.REFUNDED),
            updated_at=datetime.now(timezone.utc),
        )
