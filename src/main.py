"""
Production FastAPI Application

Restores the booking ledger on startup and saves it on shutdown.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config import di
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.cinema.domain.reservation_errors import PersistenceIOError


tracing = TracingConfig(service_name='reservation-service')


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('[Reservation Service] Starting up...')

    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    di.setup()
    Logger.base.info('[Reservation Service] Dependency injection wired')

    # IntegrityViolationError propagates here and aborts startup
    restored = container.reservation_service().restore()
    Logger.base.info(f'[Reservation Service] Ready with {restored} restored bookings')

    yield

    Logger.base.info('[Reservation Service] Shutting down...')
    try:
        container.reservation_service().save()
    except PersistenceIOError as e:
        Logger.base.error(f'[Reservation Service] Final save failed: {e.message}')

    tracing.shutdown()
    container.unwire()
    di.cleanup()
    Logger.base.info('[Reservation Service] Shutdown complete')


app = create_app(lifespan=lifespan, tracing=tracing)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
