from enum import StrEnum

from src.service.escrow.domain.state_transition import StatusTransition


class EscrowStatus(StrEnum):
    HOLDING = 'holding'
    RELEASED = 'released'
    REFUNDED = 'refunded'


# Released is terminal: no claw-back through the refund path
ESCROW_TRANSITIONS: StatusTransition[EscrowStatus] = StatusTransition(
    'Escrow',
    {
        EscrowStatus.HOLDING: frozenset({EscrowStatus.RELEASED, EscrowStatus.REFUNDED}),
    },
)
