from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class EscrowModel(Base):
    __tablename__ = 'escrow'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    order_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('order.id'), nullable=False, unique=True
    )
    beneficiary_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id'), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='holding', nullable=False)
    released_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
