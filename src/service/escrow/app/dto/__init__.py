"""Application layer DTOs"""

from src.service.escrow.app.dto.event_refund_dto import EventRefundResult, FailedOrderRefund

__all__ = [
    'EventRefundResult',
    'FailedOrderRefund',
]
