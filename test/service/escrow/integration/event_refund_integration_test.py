"""
Refunding a cancelled event against a real database

The organizer refunds every paid order of one event. Orders are refunded
one unit of work at a time, so a failure on one order leaves the others
refunded and itself untouched.
"""

from typing import Any, Dict, List

import pytest

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork, new_unit_of_work
from src.platform.exception.exceptions import ForbiddenError
from src.service.escrow.app.command.create_order_use_case import CreateOrderUseCase
from src.service.escrow.app.command.refund_event_orders_use_case import RefundEventOrdersUseCase
from src.service.escrow.app.command.release_escrow_use_case import ReleaseEscrowUseCase
from src.service.escrow.app.query.list_event_refunds_use_case import ListEventRefundsUseCase
from src.service.escrow.driven_adapter.model import RefundModel
from src.service.escrow.driven_adapter.payment.mock_payment_provider_impl import (
    MockPaymentProviderImpl,
)
from src.service.escrow.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from test.shared.utils import count_rows, create_ticket, get_settlement_statuses, validate_ticket
from test.util_constant import DEFAULT_EVENT_ID, DEFAULT_TICKET_PRICE


pytestmark = pytest.mark.integration

OTHER_EVENT_ID = DEFAULT_EVENT_ID + 1


def _order_query_repo() -> OrderQueryRepoImpl:
    return OrderQueryRepoImpl(session_factory=get_session_maker())


def _refund_event_use_case(*, fail_all: bool = False) -> RefundEventOrdersUseCase:
    return RefundEventOrdersUseCase(
        order_query_repo=_order_query_repo(),
        uow_factory=new_unit_of_work,
        payment_provider=MockPaymentProviderImpl(fail_all=fail_all),
    )


async def _place_order(buyer: Dict[str, Any], ticket: Dict[str, Any]):
    use_case = CreateOrderUseCase(
        uow=SqlAlchemyUnitOfWork(get_session_maker()()), settings=Settings(PAYMENT_CURRENCY='USD')
    )
    return await use_case.execute(
        buyer_id=buyer['id'], ticket_id=ticket['id'], amount=ticket['price']
    )


async def _sold_tickets(
    buyer: Dict[str, Any], organizer: Dict[str, Any], *, event_id: int, count: int
) -> List[Any]:
    aggregates = []
    for _ in range(count):
        ticket = await create_ticket(
            event_id=event_id, organizer_id=organizer['id'], price=DEFAULT_TICKET_PRICE
        )
        aggregates.append(await _place_order(buyer, ticket))
    return aggregates


class TestRefundEventOrdersIntegration:
    async def test_only_paid_orders_of_the_event_are_refunded(self, buyer, organizer):
        """
        Given: an event with two paid orders and one already released, plus a paid
               order for another event of the same organizer
        When: the organizer refunds the event
        Then:
          - the two paid orders are refunded with every part in `refunded`
          - the released order and the other event's order are untouched
        """
        # Arrange
        paid = await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=2)
        [released] = await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=1)
        await validate_ticket(released.ticket.id)
        await ReleaseEscrowUseCase(
            uow=new_unit_of_work(), payment_provider=MockPaymentProviderImpl()
        ).execute(order_id=released.order.id)
        [other_event] = await _sold_tickets(buyer, organizer, event_id=OTHER_EVENT_ID, count=1)

        # Act
        result = await _refund_event_use_case().execute(
            event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id']
        )

        # Assert
        assert {refund.order_id for refund in result.refunded} == {
            aggregate.order.id for aggregate in paid
        }
        assert result.failed == []
        assert result.total_amount == 2 * DEFAULT_TICKET_PRICE
        for aggregate in paid:
            assert await get_settlement_statuses(aggregate.order.id) == {
                'order': 'refunded',
                'ticket': 'refunded',
                'payment': 'refunded',
                'escrow': 'refunded',
                'refunds': 1,
            }
        released_statuses = await get_settlement_statuses(released.order.id)
        assert released_statuses['order'] == 'released'
        assert released_statuses['escrow'] == 'released'
        assert (await get_settlement_statuses(other_event.order.id))['order'] == 'paid'
        assert await count_rows(RefundModel) == 2

    async def test_refunding_twice_finds_nothing_left(self, buyer, organizer):
        await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=1)
        await _refund_event_use_case().execute(
            event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id']
        )

        result = await _refund_event_use_case().execute(
            event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id']
        )

        assert result.refunded == []
        assert result.failed == []
        assert await count_rows(RefundModel) == 1

    async def test_other_organizer_is_forbidden(self, buyer, organizer, another_organizer):
        [aggregate] = await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=1)

        with pytest.raises(ForbiddenError):
            await _refund_event_use_case().execute(
                event_id=DEFAULT_EVENT_ID, organizer_id=another_organizer['id']
            )

        assert (await get_settlement_statuses(aggregate.order.id))['order'] == 'paid'
        assert await count_rows(RefundModel) == 0

    async def test_unknown_event_is_forbidden(self, organizer):
        with pytest.raises(ForbiddenError):
            await _refund_event_use_case().execute(event_id=999, organizer_id=organizer['id'])

    async def test_declined_refunds_are_reported_per_order(self, buyer, organizer):
        """
        Given: an event with two paid orders
        When: the payment provider declines every refund
        Then:
          - both orders are reported as transaction_failure
          - nothing is written for either order
        """
        # Arrange
        aggregates = await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=2)

        # Act
        result = await _refund_event_use_case(fail_all=True).execute(
            event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id']
        )

        # Assert
        assert result.refunded == []
        assert {failure.order_id for failure in result.failed} == {
            aggregate.order.id for aggregate in aggregates
        }
        assert {failure.kind for failure in result.failed} == {'transaction_failure'}
        for aggregate in aggregates:
            statuses = await get_settlement_statuses(aggregate.order.id)
            assert statuses['order'] == 'paid'
            assert statuses['escrow'] == 'holding'
        assert await count_rows(RefundModel) == 0


class TestListEventRefundsIntegration:
    async def test_lists_event_refunds_newest_first(self, buyer, organizer):
        await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=2)
        await _sold_tickets(buyer, organizer, event_id=OTHER_EVENT_ID, count=1)
        await _refund_event_use_case().execute(
            event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id']
        )
        await _refund_event_use_case().execute(
            event_id=OTHER_EVENT_ID, organizer_id=organizer['id']
        )
        use_case = ListEventRefundsUseCase(order_query_repo=_order_query_repo())

        refunds = await use_case.list_event_refunds(
            event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id']
        )

        assert len(refunds) == 2
        created = [refund.created_at for refund in refunds]
        assert created == sorted(created, reverse=True)
        assert {refund.reason for refund in refunds} == {
            f'Event {DEFAULT_EVENT_ID} has been cancelled'
        }

    async def test_other_organizer_cannot_list(self, buyer, organizer, another_organizer):
        await _sold_tickets(buyer, organizer, event_id=DEFAULT_EVENT_ID, count=1)
        use_case = ListEventRefundsUseCase(order_query_repo=_order_query_repo())

        with pytest.raises(ForbiddenError):
            await use_case.list_event_refunds(
                event_id=DEFAULT_EVENT_ID, organizer_id=another_organizer['id']
            )
