from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.escrow.domain.entity.ticket_entity import Ticket
from src.service.escrow.driven_adapter.model.ticket_model import TicketModel
from src.service.escrow.driven_adapter.repo.model_mapper import ticket_to_entity


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_for_update(self, *, ticket_id: int) -> Optional[Ticket]:
        result = await self.session.execute(
            select(TicketModel).where(TicketModel.id == ticket_id).with_for_update()
        )
        db_ticket = result.scalar_one_or_none()

        if not db_ticket:
            return None

        return ticket_to_entity(db_ticket)
