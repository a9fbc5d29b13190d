from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.escrow.app.interface.i_payment_provider import PaymentProviderResult


@pytest.fixture
def mock_uow() -> MagicMock:
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.ticket_command_repo.get_for_update = AsyncMock()
    uow.order_command_repo.create = AsyncMock()
    uow.order_command_repo.get_aggregate_for_update = AsyncMock()
    uow.order_command_repo.get_aggregate_by_idempotency_key = AsyncMock(return_value=None)
    uow.order_command_repo.apply_status_changes = AsyncMock()
    uow.refund_command_repo.create = AsyncMock(side_effect=lambda *, refund: refund)
    return uow


@pytest.fixture
def mock_payment_provider() -> MagicMock:
    provider = MagicMock()
    provider.capture = AsyncMock(
        side_effect=lambda **kwargs: PaymentProviderResult(
            success=True, provider_payment_id=kwargs['provider_payment_id']
        )
    )
    provider.refund = AsyncMock(
        side_effect=lambda **kwargs: PaymentProviderResult(
            success=True, provider_payment_id=kwargs['provider_payment_id']
        )
    )
    return provider
