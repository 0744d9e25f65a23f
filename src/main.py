"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Rental Service] Starting up...')

    tracing = TracingConfig(service_name='library-rental-service')
    tracing.setup()
    Logger.base.info('📊 [Rental Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Rental Service] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    await create_db_and_tables()
    Logger.base.info('🗄️  [Rental Service] Database tables ready + instrumented')

    yield

    Logger.base.info('🛑 [Rental Service] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️  [Rental Service] Database engine disposed')

    # Flush remaining spans
    tracing.shutdown()

    container.unwire()

    Logger.base.info('👋 [Rental Service] Shutdown complete')


app = create_app(lifespan=lifespan)
