from enum import StrEnum


class RefundStatus(StrEnum):
    """Refunds are written once and never transition"""

    ISSUED = 'issued'
    FAILED = 'failed'
