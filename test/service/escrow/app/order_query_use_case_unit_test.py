"""
Unit tests for GetOrderUseCase / ListRefundsUseCase / ListEventRefundsUseCase

Test Focus:
1. Order details come straight from the query repository
2. Unknown order id → NotFoundError for both queries
3. Event refunds are only listed for the organizer who owns the event
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.escrow.app.query.get_order_use_case import GetOrderUseCase
from src.service.escrow.app.query.list_event_refunds_use_case import ListEventRefundsUseCase
from src.service.escrow.app.query.list_refunds_use_case import ListRefundsUseCase
from src.service.escrow.domain.entity.refund_entity import Refund
from test.service.escrow.escrow_test_factory import ORGANIZER_ID, PRICE, build_aggregate


@pytest.fixture
def mock_order_query_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_order_with_details = AsyncMock()
    repo.exists = AsyncMock(return_value=True)
    repo.list_refunds = AsyncMock(return_value=[])
    repo.organizer_owns_event = AsyncMock(return_value=True)
    repo.list_event_refunds = AsyncMock(return_value=[])
    return repo


@pytest.mark.unit
class TestGetOrder:
    async def test_get_order_returns_aggregate(self, mock_order_query_repo: MagicMock):
        aggregate = build_aggregate()
        mock_order_query_repo.get_order_with_details.return_value = aggregate
        use_case = GetOrderUseCase(order_query_repo=mock_order_query_repo)

        result = await use_case.get_order(aggregate.order.id)

        assert result is aggregate
        mock_order_query_repo.get_order_with_details.assert_awaited_once_with(
            order_id=aggregate.order.id
        )

    async def test_get_order_not_found(self, mock_order_query_repo: MagicMock):
        mock_order_query_repo.get_order_with_details.return_value = None
        use_case = GetOrderUseCase(order_query_repo=mock_order_query_repo)

        with pytest.raises(NotFoundError, match='Order not found'):
            await use_case.get_order(uuid7())


@pytest.mark.unit
class TestListRefunds:
    async def test_list_refunds(self, mock_order_query_repo: MagicMock):
        order_id = uuid7()
        refund = Refund.issue(order_id=order_id, issued_by=ORGANIZER_ID, amount=PRICE)
        mock_order_query_repo.list_refunds.return_value = [refund]
        use_case = ListRefundsUseCase(order_query_repo=mock_order_query_repo)

        result = await use_case.list_refunds(order_id)

        assert result == [refund]

    async def test_list_refunds_empty(self, mock_order_query_repo: MagicMock):
        use_case = ListRefundsUseCase(order_query_repo=mock_order_query_repo)

        assert await use_case.list_refunds(uuid7()) == []

    async def test_list_refunds_unknown_order(self, mock_order_query_repo: MagicMock):
        mock_order_query_repo.exists.return_value = False
        use_case = ListRefundsUseCase(order_query_repo=mock_order_query_repo)

        with pytest.raises(NotFoundError, match='Order not found'):
            await use_case.list_refunds(uuid7())

        mock_order_query_repo.list_refunds.assert_not_awaited()


@pytest.mark.unit
class TestListEventRefunds:
    async def test_owner_lists_event_refunds(self, mock_order_query_repo: MagicMock):
        """
        Given: two refunds issued for orders of the organizer's event
        When: the organizer lists the event's refunds
        Then: the repository's list comes back as is
        """
        # Arrange
        refunds = [
            Refund.issue(order_id=uuid7(), issued_by=ORGANIZER_ID, amount=PRICE) for _ in range(2)
        ]
        mock_order_query_repo.list_event_refunds.return_value = refunds
        use_case = ListEventRefundsUseCase(order_query_repo=mock_order_query_repo)

        # Act
        result = await use_case.list_event_refunds(event_id=1, organizer_id=ORGANIZER_ID)

        # Assert
        assert result == refunds
        mock_order_query_repo.organizer_owns_event.assert_awaited_once_with(
            event_id=1, organizer_id=ORGANIZER_ID
        )
        mock_order_query_repo.list_event_refunds.assert_awaited_once_with(event_id=1)

    async def test_other_organizer_is_forbidden(self, mock_order_query_repo: MagicMock):
        mock_order_query_repo.organizer_owns_event.return_value = False
        use_case = ListEventRefundsUseCase(order_query_repo=mock_order_query_repo)

        with pytest.raises(ForbiddenError, match='view refunds for this event'):
            await use_case.list_event_refunds(event_id=1, organizer_id=77)

        mock_order_query_repo.list_event_refunds.assert_not_awaited()
