from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.command.create_order_use_case import CreateOrderUseCase
from src.service.escrow.app.command.issue_refund_use_case import IssueRefundUseCase
from src.service.escrow.app.command.refund_event_orders_use_case import RefundEventOrdersUseCase
from src.service.escrow.app.command.release_escrow_use_case import ReleaseEscrowUseCase
from src.service.escrow.app.query.get_order_use_case import GetOrderUseCase
from src.service.escrow.app.query.list_event_refunds_use_case import ListEventRefundsUseCase
from src.service.escrow.app.query.list_refunds_use_case import ListRefundsUseCase
from src.service.escrow.driving_adapter.http_controller.schema.order_schema import (
    EscrowResponse,
    EventRefundRequest,
    EventRefundResponse,
    OrderCreateRequest,
    OrderDetailResponse,
    OrderResponse,
    RefundRequest,
    RefundResponse,
    ReleaseEscrowRequest,
    ReleaseEscrowResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: OrderCreateRequest,
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> OrderDetailResponse:
    aggregate = await use_case.execute(
        buyer_id=request.buyer_id,
        ticket_id=request.ticket_id,
        amount=request.amount,
        idempotency_key=request.idempotency_key,
    )
    return OrderDetailResponse.from_aggregate(aggregate)


@router.get('/refunds')
@Logger.io
async def list_event_refunds(
    event_id: int = Query(...),
    organizer_id: int = Query(...),
    use_case: ListEventRefundsUseCase = Depends(ListEventRefundsUseCase.depends),
) -> List[RefundResponse]:
    refunds = await use_case.list_event_refunds(event_id=event_id, organizer_id=organizer_id)
    return [RefundResponse.from_entity(refund) for refund in refunds]


@router.get('/{order_id}')
@Logger.io
async def get_order(
    order_id: UUID,
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderDetailResponse:
    aggregate = await use_case.get_order(order_id)
    return OrderDetailResponse.from_aggregate(aggregate)


@router.post('/{order_id}/release', status_code=status.HTTP_200_OK)
@Logger.io
async def release_escrow(
    order_id: UUID,
    request: Optional[ReleaseEscrowRequest] = None,
    use_case: ReleaseEscrowUseCase = Depends(ReleaseEscrowUseCase.depends),
) -> ReleaseEscrowResponse:
    aggregate = await use_case.execute(
        order_id=order_id,
        triggered_by=request.triggered_by if request else None,
    )
    if aggregate.escrow is None:
        raise ValueError('Escrow should not be None after release.')

    return ReleaseEscrowResponse(
        order=OrderResponse.from_entity(aggregate.order),
        escrow=EscrowResponse.from_entity(aggregate.escrow),
    )


@router.post('/{order_id}/refund', status_code=status.HTTP_201_CREATED)
@Logger.io
async def issue_refund(
    order_id: UUID,
    request: RefundRequest,
    use_case: IssueRefundUseCase = Depends(IssueRefundUseCase.depends),
) -> RefundResponse:
    refund = await use_case.execute(
        order_id=order_id,
        organizer_id=request.organizer_id,
        reason=request.reason,
    )
    return RefundResponse.from_entity(refund)


@router.get('/{order_id}/refunds')
@Logger.io
async def list_refunds(
    order_id: UUID,
    use_case: ListRefundsUseCase = Depends(ListRefundsUseCase.depends),
) -> List[RefundResponse]:
    refunds = await use_case.list_refunds(order_id)
    return [RefundResponse.from_entity(refund) for refund in refunds]


@router.post('/event/{event_id}/refund', status_code=status.HTTP_200_OK)
@Logger.io
async def refund_event_orders(
    event_id: int,
    request: EventRefundRequest,
    use_case: RefundEventOrdersUseCase = Depends(RefundEventOrdersUseCase.depends),
) -> EventRefundResponse:
    result = await use_case.execute(
        event_id=event_id,
        organizer_id=request.organizer_id,
        reason=request.reason,
    )
    return EventRefundResponse.from_result(result)
