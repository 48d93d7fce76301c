"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [RSO Events] Starting up...')

    tracing = TracingConfig(service_name='rso-events')
    tracing.setup()
    Logger.base.info('📊 [RSO Events] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [RSO Events] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [RSO Events] Database engine ready + instrumented')

    # Created eagerly so every request shares the one live feed
    container.live_feed_broadcaster()

    Logger.base.info('✅ [RSO Events] Ready to serve requests')

    yield

    Logger.base.info('🛑 [RSO Events] Shutting down...')

    await dispose_engine()

    tracing.shutdown()
    Logger.base.info('📊 [RSO Events] Tracing shutdown complete')

    container.unwire()

    Logger.base.info('👋 [RSO Events] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
