# src/webhooks/domain/value_objects/__init__.py
"""
WebHook Domain Value Objects
"""
from .hub_signature import SIGNATURE_HEADER_NAME, HubSignature
from .webhook_response import WebhookResponse

__all__ = [
    "HubSignature",
    "SIGNATURE_HEADER_NAME",
    "WebhookResponse",
]
