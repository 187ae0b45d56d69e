"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from healarr_notify import __version__
from healarr_notify.config import Settings, get_settings
from healarr_notify.database import create_engine, create_session_maker, create_tables
from healarr_notify.eventbus import InMemoryEventBus
from healarr_notify.exceptions import (
    ConfigurationError,
    EncryptionError,
    NotFoundError,
    StoreError,
)
from healarr_notify.middleware.error_handler import (
    configuration_error_handler,
    encryption_error_handler,
    generic_exception_handler,
    not_found_handler,
    store_error_handler,
    validation_exception_handler,
)
from healarr_notify.routers import notifications
from healarr_notify.security.encryption import SecretCipher
from healarr_notify.services.notification_service import NotificationService
from healarr_notify.services.transport import ShoutrrrTransport, Transport

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, transport: Transport | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (environment settings if None)
        transport: Transport for provider URLs (shoutrrr CLI if None)
    """
    config = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Build and start the notification service; stop it on shutdown."""
        engine = create_engine(config)
        if config.database_create_tables:
            await create_tables(engine)

        cipher = SecretCipher.from_settings(config)
        if not config.encryption_enabled:
            logger.warning("HEALARR_ENCRYPTION_KEY not set, notification credentials are stored unencrypted")

        event_bus = InMemoryEventBus(queue_size=config.subscriber_queue_size)
        service = NotificationService(
            session_maker=create_session_maker(engine),
            event_bus=event_bus,
            cipher=cipher,
            transport=transport
            or ShoutrrrTransport(config.shoutrrr_binary, timeout=config.http_timeout_seconds),
            settings=config,
        )
        await service.start()

        app.state.event_bus = event_bus
        app.state.notification_service = service
        try:
            yield
        finally:
            await service.stop()
            await event_bus.shutdown()
            await engine.dispose()

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="Healarr notification dispatch API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(EncryptionError, encryption_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
