from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.enum.refund_status import RefundStatus


@attrs.frozen
class Refund:
    id: UUID
    order_id: UUID
    issued_by: int
    amount: int
    status: RefundStatus = RefundStatus.ISSUED
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def issue(
        cls, *, order_id: UUID, issued_by: int, amount: int, reason: Optional[str] = None
    ) -> 'Refund':
        return cls(
            id=uuid7(),
            order_id=order_id,
            issued_by=issued_by,
            amount=amount,
            status=RefundStatus.ISSUED,
            reason=reason,
            created_at=datetime.now(timezone.utc),
        )
