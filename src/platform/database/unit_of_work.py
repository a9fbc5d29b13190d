"""
Unit of Work Pattern - one database transaction per escrow operation

Architecture:
- UoW owns the session and therefore the transaction boundary
- UoW is responsible for commit / rollback
- Repositories are built on top of the UoW's shared session
- Use cases receive the UoW explicitly and coordinate repositories through it

Leaving the `async with` block without a commit rolls everything back, so a
failure at any point (business rule, provider, storage) leaves no trace.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session, get_session_maker
from src.platform.exception.exceptions import TransactionFailureError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.escrow.app.interface.i_order_command_repo import IOrderCommandRepo
    from src.service.escrow.app.interface.i_refund_command_repo import IRefundCommandRepo
    from src.service.escrow.app.interface.i_ticket_command_repo import ITicketCommandRepo
    from src.service.escrow.app.interface.i_user_query_repo import IUserQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the escrow service

    Usage:
        async with uow:
            ticket = await uow.ticket_command_repo.get_for_update(ticket_id=...)
            ...
            await uow.commit()
    """

    users: IUserQueryRepo
    ticket_command_repo: ITicketCommandRepo
    order_command_repo: IOrderCommandRepo
    refund_command_repo: IRefundCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Usage in use case:
        async with self.uow:
            await self.uow.order_command_repo.create(...)
            await self.uow.commit()
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        from src.service.escrow.driven_adapter.repo.order_command_repo_impl import (
            OrderCommandRepoImpl,
        )
        from src.service.escrow.driven_adapter.repo.refund_command_repo_impl import (
            RefundCommandRepoImpl,
        )
        from src.service.escrow.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )
        from src.service.escrow.driven_adapter.repo.user_query_repo_impl import (
            UserQueryRepoImpl,
        )

        # All repositories share the same session (= same transaction)
        self.users = UserQueryRepoImpl(session=self.session)
        self.ticket_command_repo = TicketCommandRepoImpl(session=self.session)
        self.order_command_repo = OrderCommandRepoImpl(session=self.session)
        self.refund_command_repo = RefundCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, exc_type, exc, tb):
        await super().__aexit__(exc_type, exc, tb)
        # Session cleanup is handled by get_async_session
        if isinstance(exc, SQLAlchemyError):
            Logger.base.error(f'💥 [UOW] Storage error, transaction rolled back: {exc}')
            raise TransactionFailureError('Storage error during transaction') from exc

    async def _commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            Logger.base.error(f'💥 [UOW] Commit failed: {e}')
            raise TransactionFailureError('Transaction could not be committed') from e

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work

    Usage:
        async def create_order(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                ...
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session)


def new_unit_of_work() -> AbstractUnitOfWork:
    """
    Unit of Work with a session of its own

    For work that needs one transaction per item (e.g. refunding every order of
    an event) instead of the single per-request transaction.
    """
    return SqlAlchemyUnitOfWork(get_session_maker()())
