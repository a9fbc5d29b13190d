from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_refund_command_repo import IRefundCommandRepo
from src.service.escrow.domain.entity.refund_entity import Refund
from src.service.escrow.driven_adapter.model.refund_model import RefundModel
from src.service.escrow.driven_adapter.repo.model_mapper import refund_to_entity


class RefundCommandRepoImpl(IRefundCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, refund: Refund) -> Refund:
        db_refund = RefundModel(
            id=refund.id,
            order_id=refund.order_id,
            issued_by=refund.issued_by,
            amount=refund.amount,
            reason=refund.reason,
            status=refund.status.value,
            created_at=refund.created_at,
        )
        self.session.add(db_refund)
        await self.session.flush()
        return refund_to_entity(db_refund)
