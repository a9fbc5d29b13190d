from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class RefundModel(Base):
    __tablename__ = 'refund'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    order_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('order.id'), nullable=False, index=True
    )
    issued_by: Mapped[int] = mapped_column(Integer, ForeignKey('user.id'), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default='issued', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
