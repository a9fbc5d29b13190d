"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.escrow.driven_adapter.model.escrow_model import EscrowModel
from src.service.escrow.driven_adapter.model.order_model import OrderModel
from src.service.escrow.driven_adapter.model.payment_model import PaymentModel
from src.service.escrow.driven_adapter.model.refund_model import RefundModel
from src.service.escrow.driven_adapter.model.ticket_model import TicketModel
from src.service.escrow.driven_adapter.model.user_model import UserModel

__all__ = [
    'EscrowModel',
    'OrderModel',
    'PaymentModel',
    'RefundModel',
    'TicketModel',
    'UserModel',
]
