from src.platform.logging.loguru_io import Logger
from src.service.escrow.app.interface.i_payment_provider import (
    IPaymentProvider,
    PaymentProviderResult,
)


class MockPaymentProviderImpl(IPaymentProvider):
    """
    In-process stand-in for the payment provider

    Every call succeeds unless `fail_all` is set (PAYMENT_PROVIDER_FAIL_ALL),
    which turns every capture / refund into a rejection.
    """

    def __init__(self, *, fail_all: bool = False) -> None:
        self.fail_all = fail_all

    @Logger.io
    async def capture(
        self, *, provider_payment_id: str, amount: int, currency: str
    ) -> PaymentProviderResult:
        if self.fail_all:
            return PaymentProviderResult(
                success=False,
                provider_payment_id=provider_payment_id,
                message='Capture declined by mock provider',
            )

        Logger.base.info(f'💳 [MOCK_PROVIDER] captured {amount} {currency} for {provider_payment_id}')
        return PaymentProviderResult(success=True, provider_payment_id=provider_payment_id)

    @Logger.io
    async def refund(
        self, *, provider_payment_id: str, amount: int, currency: str
    ) -> PaymentProviderResult:
        if self.fail_all:
            return PaymentProviderResult(
                success=False,
                provider_payment_id=provider_payment_id,
                message='Refund declined by mock provider',
            )

        Logger.base.info(f'💸 [MOCK_PROVIDER] refunded {amount} {currency} for {provider_payment_id}')
        return PaymentProviderResult(success=True, provider_payment_id=provider_payment_id)
