"""
Order Command Repository Interface

Persists the Order aggregate (Order + Payment + Escrow, plus the status of the
Ticket it was placed for) inside the caller's Unit of Work.
"""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate, StatusChange


class IOrderCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, aggregate: OrderAggregate) -> None:
        """
        Insert the new Order, Payment and Escrow rows and apply the aggregate's
        recorded status changes (the ticket reservation)
        """
        pass

    @abstractmethod
    async def get_aggregate_for_update(self, *, order_id: UUID) -> OrderAggregate | None:
        """
        Load order, ticket, payment and escrow rows with locking reads

        Returns:
            OrderAggregate or None if the order does not exist
        """
        pass

    @abstractmethod
    async def get_aggregate_by_idempotency_key(
        self, *, buyer_id: int, idempotency_key: str
    ) -> OrderAggregate | None:
        pass

    @abstractmethod
    async def apply_status_changes(self, *, changes: List[StatusChange]) -> None:
        """
        Write every change as a conditional update on its expected current status

        Raises:
            InvalidStateError: a row was no longer in its expected status
        """
        pass
