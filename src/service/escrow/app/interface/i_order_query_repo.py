from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate
from src.service.escrow.domain.entity.refund_entity import Refund


class IOrderQueryRepo(ABC):
    @abstractmethod
    async def get_order_with_details(self, *, order_id: UUID) -> OrderAggregate | None:
        """
        Read an order together with its ticket, payment and escrow

        Returns:
            OrderAggregate or None if not found
        """
        pass

    @abstractmethod
    async def exists(self, *, order_id: UUID) -> bool:
        pass

    @abstractmethod
    async def list_refunds(self, *, order_id: UUID) -> List[Refund]:
        """Refunds of an order, oldest first"""
        pass

    @abstractmethod
    async def organizer_owns_event(self, *, event_id: int, organizer_id: int) -> bool:
        """True when at least one ticket of the event belongs to the organizer"""
        pass

    @abstractmethod
    async def list_refundable_order_ids(self, *, event_id: int) -> List[UUID]:
        """Ids of the event's orders that still hold funds (status paid), oldest first"""
        pass

    @abstractmethod
    async def list_event_refunds(self, *, event_id: int) -> List[Refund]:
        """Refunds of every order of the event, newest first"""
        pass
