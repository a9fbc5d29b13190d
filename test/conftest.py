"""
Test Configuration and Fixtures

This module provides:
- A per-worker SQLite database file for integration tests (pytest-xdist safe)
- Database reset between integration tests
- A session-scoped TestClient for HTTP tests
- Seed fixtures for an organizer, a buyer and an available ticket

Architecture:
- Unit tests (@pytest.mark.unit): mock every port, never touch the database
- Integration tests: real SQLite database, rebuilt before every test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings read DATABASE_URL_ASYNC at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_file = Path(tempfile.gettempdir()) / f'escrow_settlement_test_{worker_id}.db'
    os.environ['DATABASE_URL_ASYNC'] = f'sqlite+aiosqlite:///{db_file}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['PAYMENT_PROVIDER_FAIL_ALL'] = 'false'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.database.orm_db_setting import Base, get_engine  # noqa: E402
from src.service.escrow.domain.enum import UserRole  # noqa: E402
from test.shared.utils import create_ticket, create_user  # noqa: E402
from test.util_constant import (  # noqa: E402
    ANOTHER_ORGANIZER_EMAIL,
    ANOTHER_ORGANIZER_NAME,
    DEFAULT_EVENT_ID,
    DEFAULT_TICKET_PRICE,
    TEST_BUYER_EMAIL,
    TEST_BUYER_NAME,
    TEST_ORGANIZER_EMAIL,
    TEST_ORGANIZER_NAME,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _reset_all_tables() -> None:
    import src.service.escrow.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _reset_all_tables()
    yield

    from src.platform.database.orm_db_setting import _engine_manager

    try:
        current_loop = asyncio.get_running_loop()
    except RuntimeError:
        current_loop = None

    if current_loop is not None and _engine_manager._loop is current_loop:
        await _engine_manager.dispose()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# =============================================================================
# Seed Fixtures (integration tests only)
# =============================================================================
@pytest.fixture
async def organizer(clean_database: None) -> dict[str, Any]:
    return await create_user(
        email=TEST_ORGANIZER_EMAIL, name=TEST_ORGANIZER_NAME, role=UserRole.ORGANIZER
    )


@pytest.fixture
async def another_organizer(clean_database: None) -> dict[str, Any]:
    return await create_user(
        email=ANOTHER_ORGANIZER_EMAIL, name=ANOTHER_ORGANIZER_NAME, role=UserRole.ORGANIZER
    )


@pytest.fixture
async def buyer(clean_database: None) -> dict[str, Any]:
    return await create_user(email=TEST_BUYER_EMAIL, name=TEST_BUYER_NAME, role=UserRole.BUYER)


@pytest.fixture
async def available_ticket(organizer: dict[str, Any]) -> dict[str, Any]:
    return await create_ticket(
        event_id=DEFAULT_EVENT_ID, organizer_id=organizer['id'], price=DEFAULT_TICKET_PRICE
    )
