"""
Payment Provider Interface

Synchronous success / failure calls against the external payment provider.
Called from inside the Unit of Work, so a failed call rolls back the whole
operation.
"""

from abc import ABC, abstractmethod

import attrs


@attrs.frozen
class PaymentProviderResult:
    success: bool
    provider_payment_id: str
    message: str = ''


class IPaymentProvider(ABC):
    @abstractmethod
    async def capture(
        self, *, provider_payment_id: str, amount: int, currency: str
    ) -> PaymentProviderResult:
        """Turn a held authorization into a transfer"""
        pass

    @abstractmethod
    async def refund(
        self, *, provider_payment_id: str, amount: int, currency: str
    ) -> PaymentProviderResult:
        """Reverse a held authorization back to the buyer"""
        pass
