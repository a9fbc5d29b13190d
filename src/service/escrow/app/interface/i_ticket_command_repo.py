from abc import ABC, abstractmethod

from src.service.escrow.domain.entity.ticket_entity import Ticket


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def get_for_update(self, *, ticket_id: int) -> Ticket | None:
        """
        Load a ticket with a row lock held until the surrounding transaction ends

        Returns:
            Ticket entity or None if not found
        """
        pass
