from enum import StrEnum

from src.service.escrow.domain.state_transition import StatusTransition


class OrderStatus(StrEnum):
    PENDING = 'pending'
    PAID = 'paid'  # Buyer has been charged; funds sit in escrow
    RELEASED = 'released'
    REFUNDED = 'refunded'
    CANCELLED = 'cancelled'


ORDER_TRANSITIONS: StatusTransition[OrderStatus] = StatusTransition(
    'Order',
    {
        OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
        OrderStatus.PAID: frozenset(
            {OrderStatus.RELEASED, OrderStatus.REFUNDED, OrderStatus.CANCELLED}
        ),
    },
)
