"""
WebHook Receiver Protocol
One implementation per sending platform.
"""
from typing import Optional, Protocol

from src.shared.domain.result import Result
from src.webhooks.domain.exceptions import WebhookError
from src.webhooks.domain.protocols.request import WebhookRequest
from src.webhooks.domain.value_objects import WebhookResponse

ReceiveResult = Result[WebhookResponse, WebhookError]


class WebhookReceiver(Protocol):
    """Receiver capability: answer handshakes, verify and forward notifications."""

    @property
    def name(self) -> str:
        ...

    async def receive(self, webhook_id: Optional[str], request: WebhookRequest) -> ReceiveResult:
        """Entry point; dispatches on the HTTP method."""
        ...

    async def handle_challenge(self, webhook_id: str, request: WebhookRequest) -> ReceiveResult:
        ...

    async def verify_and_forward(self, webhook_id: str, request: WebhookRequest) -> ReceiveResult:
        ...
