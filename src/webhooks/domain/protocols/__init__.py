# src/webhooks/domain/protocols/__init__.py
"""
WebHook Domain Protocols (collaborator interfaces)
"""
from .dispatcher import Dispatcher
from .receiver import ReceiveResult, WebhookReceiver
from .request import HeaderView, WebhookRequest
from .secret_resolver import SecretResolver

__all__ = [
    "Dispatcher",
    "HeaderView",
    "ReceiveResult",
    "SecretResolver",
    "WebhookReceiver",
    "WebhookRequest",
]
