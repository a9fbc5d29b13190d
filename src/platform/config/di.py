"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import new_unit_of_work
from src.service.escrow.driven_adapter.payment.mock_payment_provider_impl import (
    MockPaymentProviderImpl,
)
from src.service.escrow.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (session factory for read-side repositories)
    database = providers.Singleton(Database)

    # Standalone units of work (one transaction per item in batch commands)
    unit_of_work = providers.Factory(new_unit_of_work)

    # Payment provider (called inside the command transaction)
    payment_provider = providers.Singleton(
        MockPaymentProviderImpl,
        fail_all=config_service.provided.PAYMENT_PROVIDER_FAIL_ALL,
    )

    # Repositories (stateless - use session_factory per-request)
    order_query_repo = providers.Singleton(
        OrderQueryRepoImpl, session_factory=database.provided.session
    )


container = Container()
