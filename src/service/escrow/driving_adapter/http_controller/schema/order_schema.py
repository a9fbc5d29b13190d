from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.escrow.app.dto.event_refund_dto import EventRefundResult
from src.service.escrow.domain.aggregate.order_aggregate import OrderAggregate
from src.service.escrow.domain.entity.escrow_entity import Escrow
from src.service.escrow.domain.entity.order_entity import Order
from src.service.escrow.domain.entity.payment_entity import Payment
from src.service.escrow.domain.entity.refund_entity import Refund


class OrderCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'buyer_id': 2,
                'ticket_id': 1,
                'amount': 2000,
                'idempotency_key': 'checkout-7f3a9c',
            }
        },
    }

    buyer_id: int
    ticket_id: int
    amount: int
    idempotency_key: Optional[str] = Field(default=None, max_length=255)


class ReleaseEscrowRequest(BaseModel):
    triggered_by: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'triggered_by': 'gate-scanner-03'}}


class RefundRequest(BaseModel):
    organizer_id: int
    reason: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'organizer_id': 1, 'reason': 'Event cancelled'}}


class EventRefundRequest(BaseModel):
    organizer_id: int
    reason: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'organizer_id': 1, 'reason': 'Venue unavailable'}}


class PaymentResponse(BaseModel):
    id: UUID  # UUID7
    provider_payment_id: str
    amount: int
    currency: str
    status: str

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentResponse':
        return cls(
            id=payment.id,
            provider_payment_id=payment.provider_payment_id,
            amount=payment.amount,
            currency=payment.currency,
            status=payment.status.value,
        )


class EscrowResponse(BaseModel):
    id: UUID  # UUID7
    beneficiary_id: int
    amount: int
    status: str
    released_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, escrow: Escrow) -> 'EscrowResponse':
        return cls(
            id=escrow.id,
            beneficiary_id=escrow.beneficiary_id,
            amount=escrow.amount,
            status=escrow.status.value,
            released_at=escrow.released_at,
        )


class OrderResponse(BaseModel):
    id: UUID  # UUID7
    buyer_id: int
    ticket_id: int
    amount: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        return cls(
            id=order.id,
            buyer_id=order.buyer_id,
            ticket_id=order.ticket_id,
            amount=order.amount,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderDetailResponse(OrderResponse):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'buyer_id': 2,
                'ticket_id': 1,
                'amount': 2000,
                'status': 'paid',
                'created_at': '2025-01-10T10:30:00',
                'updated_at': '2025-01-10T10:30:00',
                'payment': {
                    'id': '01936d8f-5e74-7a11-8c3e-0a1b2c3d4e5f',
                    'provider_payment_id': 'PAY_MOCK_4K2Z9QXA',
                    'amount': 2000,
                    'currency': 'USD',
                    'status': 'held',
                },
                'escrow': {
                    'id': '01936d8f-5e75-7f20-9d4b-6a7b8c9d0e1f',
                    'beneficiary_id': 1,
                    'amount': 2000,
                    'status': 'holding',
                    'released_at': None,
                },
            }
        },
    }

    payment: Optional[PaymentResponse] = None
    escrow: Optional[EscrowResponse] = None

    @classmethod
    def from_aggregate(cls, aggregate: OrderAggregate) -> 'OrderDetailResponse':
        return cls(
            **OrderResponse.from_entity(aggregate.order).model_dump(),
            payment=PaymentResponse.from_entity(aggregate.payment) if aggregate.payment else None,
            escrow=EscrowResponse.from_entity(aggregate.escrow) if aggregate.escrow else None,
        )


class ReleaseEscrowResponse(BaseModel):
    order: OrderResponse
    escrow: EscrowResponse


class RefundResponse(BaseModel):
    id: UUID  # UUID7
    order_id: UUID
    issued_by: int
    amount: int
    status: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, refund: Refund) -> 'RefundResponse':
        return cls(
            id=refund.id,
            order_id=refund.order_id,
            issued_by=refund.issued_by,
            amount=refund.amount,
            status=refund.status.value,
            reason=refund.reason,
            created_at=refund.created_at,
        )


class FailedOrderRefundResponse(BaseModel):
    order_id: UUID
    detail: str
    kind: str


class EventRefundResponse(BaseModel):
    event_id: int
    refunded: List[RefundResponse]
    failed: List[FailedOrderRefundResponse]
    total_amount: int

    @classmethod
    def from_result(cls, result: EventRefundResult) -> 'EventRefundResponse':
        return cls(
            event_id=result.event_id,
            refunded=[RefundResponse.from_entity(refund) for refund in result.refunded],
            failed=[
                FailedOrderRefundResponse(
                    order_id=failure.order_id, detail=failure.detail, kind=failure.kind
                )
                for failure in result.failed
            ],
            total_amount=result.total_amount,
        )
