"""
Dispatcher Protocol
Consumes an authenticated payload; business processing lives behind it.
"""
from typing import Any, Dict, Protocol, Sequence

from src.webhooks.domain.protocols.request import WebhookRequest
from src.webhooks.domain.value_objects import WebhookResponse


class Dispatcher(Protocol):
    """Forwards verified WebHook notifications to processing."""

    async def dispatch(
        self,
        receiver: str,
        webhook_id: str,
        request: WebhookRequest,
        actions: Sequence[str],
        payload: Dict[str, Any],
    ) -> WebhookResponse:
        ...
