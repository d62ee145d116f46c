from .config_secret_resolver import ConfigSecretResolver, parse_secret_table
from .handler_dispatcher import HandlerDispatcher, LoggingWebhookHandler, WebhookHandler, WebhookHandlerContext

__all__ = [
    "ConfigSecretResolver",
    "HandlerDispatcher",
    "LoggingWebhookHandler",
    "WebhookHandler",
    "WebhookHandlerContext",
    "parse_secret_table",
]
