from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class OrderModel(Base):
    __tablename__ = 'order'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    buyer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id'), nullable=False, index=True
    )
    ticket_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('ticket.id'), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    idempotency_key: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('buyer_id', 'idempotency_key', name='uq_order_buyer_idempotency_key'),
    )
