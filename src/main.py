from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from src.config import Settings, get_settings
from src.shared.exceptions import register_exception_handlers  # central mapping
from src.shared.health import router as health_router
from src.shared.logging import get_logger, setup_logging
from src.shared.middleware import CorrelationIdMiddleware, RequestLoggingMiddleware
from src.webhooks.api import webhook_router
from src.webhooks.application.services import FacebookWebhookReceiver, ReceiverRegistry
from src.webhooks.domain.protocols import Dispatcher, SecretResolver
from src.webhooks.infrastructure import ConfigSecretResolver, HandlerDispatcher, LoggingWebhookHandler

logger = get_logger(__name__)


def build_receivers(
    settings: Settings,
    secret_resolver: Optional[SecretResolver] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> ReceiverRegistry:
    """Wire the receivers with their collaborators."""
    if secret_resolver is None:
        secret_resolver = ConfigSecretResolver(settings)
        # fail fast on a malformed secret table instead of on the first request
        secret_resolver.table_for(FacebookWebhookReceiver.RECEIVER_NAME)
    if dispatcher is None:
        dispatcher = HandlerDispatcher([LoggingWebhookHandler()])

    return ReceiverRegistry(
        FacebookWebhookReceiver(secret_resolver, dispatcher, logger=get_logger("webhooks.facebook")),
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    secret_resolver: Optional[SecretResolver] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} WebHook receivers",
        version=settings.PROJECT_VERSION,
    )
    app.state.settings = settings
    app.state.receivers = build_receivers(settings, secret_resolver, dispatcher)

    # Last added runs first: correlation id must be bound before request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware, header_name=settings.CORRELATION_ID_HEADER)

    # Routers
    app.include_router(health_router)
    app.include_router(webhook_router, prefix=settings.WEBHOOK_ROUTE_PREFIX)

    # Centralized error handling → {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": f"{settings.PROJECT_NAME} API",
            "receivers": app.state.receivers.names(),
            "health": "/health",
        }

    logger.info("Application configured", environment=settings.ENVIRONMENT, receivers=app.state.receivers.names())
    return app


app = create_app()
