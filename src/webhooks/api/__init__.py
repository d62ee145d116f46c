"""WebHooks API module initialization."""

from src.webhooks.api.routes import router as webhook_router

__all__ = ["webhook_router"]
