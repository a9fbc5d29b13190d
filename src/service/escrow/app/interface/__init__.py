"""Application layer interfaces (Ports)"""

from src.service.escrow.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.escrow.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.escrow.app.interface.i_payment_provider import (
    IPaymentProvider,
    PaymentProviderResult,
)
from src.service.escrow.app.interface.i_refund_command_repo import IRefundCommandRepo
from src.service.escrow.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.escrow.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IOrderCommandRepo',
    'IOrderQueryRepo',
    'IPaymentProvider',
    'IRefundCommandRepo',
    'ITicketCommandRepo',
    'IUserQueryRepo',
    'PaymentProviderResult',
]
