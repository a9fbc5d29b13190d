"""
Production FastAPI Application

Serves the escrow settlement API: order creation, escrow release and refunds.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Escrow Service] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Escrow Service] Dependency injection wired')

    await create_db_and_tables()
    Logger.base.info('🗄️  [Escrow Service] Database tables ready')

    Logger.base.info('✅ [Escrow Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Escrow Service] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️  [Escrow Service] Database engine disposed')

    container.unwire()

    Logger.base.info('👋 [Escrow Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
