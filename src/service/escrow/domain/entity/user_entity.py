from datetime import datetime
from typing import Optional

import attrs

from src.service.escrow.domain.enum.user_role import UserRole


@attrs.define
class User:
    id: int
    email: str
    name: str
    role: UserRole
    created_at: Optional[datetime] = None

    def is_buyer(self) -> bool:
        return self.role == UserRole.BUYER

    def is_organizer(self) -> bool:
        return self.role == UserRole.ORGANIZER
