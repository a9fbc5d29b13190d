from enum import StrEnum

from src.service.escrow.domain.state_transition import StatusTransition


class TicketStatus(StrEnum):
    AVAILABLE = 'available'
    SOLD = 'sold'
    VALIDATED = 'validated'  # Written only by the ticket validation subsystem
    REFUNDED = 'refunded'


TICKET_TRANSITIONS: StatusTransition[TicketStatus] = StatusTransition(
    'Ticket',
    {
        TicketStatus.AVAILABLE: frozenset({TicketStatus.SOLD}),
        TicketStatus.SOLD: frozenset({TicketStatus.VALIDATED, TicketStatus.REFUNDED}),
        TicketStatus.VALIDATED: frozenset({TicketStatus.REFUNDED}),
    },
)
