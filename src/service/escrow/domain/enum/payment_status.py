from enum import StrEnum

from src.service.escrow.domain.state_transition import StatusTransition


class PaymentStatus(StrEnum):
    INITIATED = 'initiated'
    HELD = 'held'  # Authorized, not yet the organizer's
    CAPTURED = 'captured'
    REFUNDED = 'refunded'
    FAILED = 'failed'


PAYMENT_TRANSITIONS: StatusTransition[PaymentStatus] = StatusTransition(
    'Payment',
    {
        PaymentStatus.INITIATED: frozenset({PaymentStatus.HELD, PaymentStatus.FAILED}),
        PaymentStatus.HELD: frozenset({PaymentStatus.CAPTURED, PaymentStatus.REFUNDED}),
    },
)
