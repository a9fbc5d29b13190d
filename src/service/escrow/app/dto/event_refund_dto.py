from typing import List
from uuid import UUID

import attrs

from src.service.escrow.domain.entity.refund_entity import Refund


@attrs.frozen
class FailedOrderRefund:
    """An order of the event that could not be refunded"""

    order_id: UUID
    detail: str
    kind: str


@attrs.frozen
class EventRefundResult:
    """Per-order outcome of refunding a cancelled event"""

    event_id: int
    refunded: List[Refund]
    failed: List[FailedOrderRefund]

    @property
    def total_amount(self) -> int:
        return sum(refund.amount for refund in self.refunded)

    @classmethod
    def empty(cls, event_id: int) -> 'EventRefundResult':
        return cls(event_id=event_id, refunded=[], failed=[])
