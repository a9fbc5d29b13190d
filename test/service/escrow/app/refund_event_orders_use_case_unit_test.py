"""
Unit tests for RefundEventOrdersUseCase

Test Focus:
1. Only the organizer owning the event may refund its orders
2. Every order is refunded in a unit of work of its own
3. A failing order is reported and does not stop the others
"""

from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.exception.exceptions import ForbiddenError
from src.service.escrow.app.command.refund_event_orders_use_case import RefundEventOrdersUseCase
from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate
from src.service.escrow.domain.enum import (
    EscrowStatus,
    OrderStatus,
    PaymentStatus,
    TicketStatus,
    UserRole,
)
from test.service.escrow.escrow_test_factory import ORGANIZER_ID, PRICE, build_aggregate, build_user


EVENT_ID = 1


def _uow_for(aggregate: OrderAggregate) -> MagicMock:
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.users.get_by_id = AsyncMock(
        return_value=build_user(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER)
    )
    uow.order_command_repo.get_aggregate_for_update = AsyncMock(return_value=aggregate)
    uow.order_command_repo.apply_status_changes = AsyncMock()
    uow.refund_command_repo.create = AsyncMock(side_effect=lambda *, refund: refund)
    return uow


@pytest.fixture
def mock_order_query_repo() -> MagicMock:
    repo = MagicMock()
    repo.organizer_owns_event = AsyncMock(return_value=True)
    repo.list_refundable_order_ids = AsyncMock(return_value=[])
    return repo


def _use_case(
    order_query_repo: MagicMock, uows: List[MagicMock], payment_provider: MagicMock
) -> RefundEventOrdersUseCase:
    return RefundEventOrdersUseCase(
        order_query_repo=order_query_repo,
        uow_factory=MagicMock(side_effect=uows),
        payment_provider=payment_provider,
    )


@pytest.mark.unit
class TestRefundEventOrders:
    async def test_every_order_is_refunded(
        self, mock_order_query_repo: MagicMock, mock_payment_provider: MagicMock
    ):
        """
        Given: an event with two paid orders
        When: its organizer refunds the event
        Then:
          - both orders are refunded, each committed in its own unit of work
          - the default cancellation reason is recorded
          - the total is the sum of both refunds
        """
        # Arrange
        aggregates = [build_aggregate(), build_aggregate()]
        uows = [_uow_for(aggregate) for aggregate in aggregates]
        mock_order_query_repo.list_refundable_order_ids.return_value = [
            aggregate.order.id for aggregate in aggregates
        ]
        use_case = _use_case(mock_order_query_repo, uows, mock_payment_provider)

        # Act
        result = await use_case.execute(event_id=EVENT_ID, organizer_id=ORGANIZER_ID)

        # Assert
        assert result.event_id == EVENT_ID
        assert [refund.order_id for refund in result.refunded] == [
            aggregate.order.id for aggregate in aggregates
        ]
        assert result.failed == []
        assert result.total_amount == 2 * PRICE
        assert {refund.reason for refund in result.refunded} == {'Event 1 has been cancelled'}
        for uow in uows:
            uow.commit.assert_awaited_once()
        assert mock_payment_provider.refund.await_count == 2

    async def test_failing_order_does_not_stop_the_rest(
        self, mock_order_query_repo: MagicMock, mock_payment_provider: MagicMock
    ):
        """
        Given: an event with one paid order and one whose escrow was already released
        When: its organizer refunds the event
        Then:
          - the paid order is refunded and committed
          - the released order is reported as invalid_state and not committed
        """
        # Arrange
        paid = build_aggregate()
        released = build_aggregate(
            ticket_status=TicketStatus.VALIDATED,
            order_status=OrderStatus.RELEASED,
            payment_status=PaymentStatus.CAPTURED,
            escrow_status=EscrowStatus.RELEASED,
        )
        uows = [_uow_for(released), _uow_for(paid)]
        mock_order_query_repo.list_refundable_order_ids.return_value = [
            released.order.id,
            paid.order.id,
        ]
        use_case = _use_case(mock_order_query_repo, uows, mock_payment_provider)

        # Act
        result = await use_case.execute(
            event_id=EVENT_ID, organizer_id=ORGANIZER_ID, reason='Venue flooded'
        )

        # Assert
        assert [refund.order_id for refund in result.refunded] == [paid.order.id]
        assert result.refunded[0].reason == 'Venue flooded'
        assert len(result.failed) == 1
        assert result.failed[0].order_id == released.order.id
        assert result.failed[0].kind == 'invalid_state'
        assert result.total_amount == PRICE
        uows[0].commit.assert_not_awaited()
        uows[1].commit.assert_awaited_once()

    async def test_other_organizer_is_forbidden(
        self, mock_order_query_repo: MagicMock, mock_payment_provider: MagicMock
    ):
        mock_order_query_repo.organizer_owns_event.return_value = False
        uow_factory = MagicMock()
        use_case = RefundEventOrdersUseCase(
            order_query_repo=mock_order_query_repo,
            uow_factory=uow_factory,
            payment_provider=mock_payment_provider,
        )

        with pytest.raises(ForbiddenError, match='refund orders for this event'):
            await use_case.execute(event_id=EVENT_ID, organizer_id=77)

        mock_order_query_repo.list_refundable_order_ids.assert_not_awaited()
        uow_factory.assert_not_called()
        mock_payment_provider.refund.assert_not_awaited()

    async def test_event_without_paid_orders(
        self, mock_order_query_repo: MagicMock, mock_payment_provider: MagicMock
    ):
        uow_factory = MagicMock()
        use_case = RefundEventOrdersUseCase(
            order_query_repo=mock_order_query_repo,
            uow_factory=uow_factory,
            payment_provider=mock_payment_provider,
        )

        result = await use_case.execute(event_id=EVENT_ID, organizer_id=ORGANIZER_ID)

        assert result.refunded == []
        assert result.failed == []
        assert result.total_amount == 0
        uow_factory.assert_not_called()
