from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.escrow.domain.enum.ticket_status import TICKET_TRANSITIONS, TicketStatus


@attrs.define
class Ticket:
    id: int
    event_id: int
    organizer_id: int
    price: int
    status: TicketStatus = TicketStatus.AVAILABLE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def ensure_available(self) -> None:
        if self.status != TicketStatus.AVAILABLE:
            raise InvalidStateError(f'Ticket {self.id} is not available (status: {self.status})')

    def is_validated(self) -> bool:
        return self.status == TicketStatus.VALIDATED

    @Logger.io
    def mark_as_sold(self) -> 'Ticket':
        self.ensure_available()
        return attrs.evolve(
            self,
            status=TICKET_TRANSITIONS.check(self.status, TicketStatus.SOLD),
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def mark_as_refunded(self) -> 'Ticket':
        return attrs.evolve(
            self,
            status=TICKET_TRANSITIONS.check(self.status, TicketStatus.REFUNDED),
            updated_at=datetime.now(timezone.utc),
        )
