"""Escrow Domain Enums"""

from src.service.escrow.domain.enum.escrow_status import ESCROW_TRANSITIONS, EscrowStatus
from src.service.escrow.domain.enum.order_status import ORDER_TRANSITIONS, OrderStatus
from src.service.escrow.domain.enum.payment_status import PAYMENT_TRANSITIONS, PaymentStatus
from src.service.escrow.domain.enum.refund_status import RefundStatus
from src.service.escrow.domain.enum.ticket_status import TICKET_TRANSITIONS, TicketStatus
from src.service.escrow.domain.enum.user_role import UserRole

__all__ = [
    'ESCROW_TRANSITIONS',
    'ORDER_TRANSITIONS',
    'PAYMENT_TRANSITIONS',
    'TICKET_TRANSITIONS',
    'EscrowStatus',
    'OrderStatus',
    'PaymentStatus',
    'RefundStatus',
    'TicketStatus',
    'UserRole',
]
