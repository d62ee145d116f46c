"""
Handler-based dispatcher.

Verified notifications are passed to every registered handler whose receiver
filter matches, in ascending ``order``. The first handler that sets
``context.response`` ends the chain; otherwise a plain 200 is returned.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from src.shared.logging import get_logger
from src.webhooks.domain.protocols import WebhookRequest
from src.webhooks.domain.value_objects import WebhookResponse

logger = get_logger(__name__)

DEFAULT_ORDER = 50


@dataclass
class WebhookHandlerContext:
    """Mutable per-notification context shared by the handler chain."""
    receiver: str
    id: str
    actions: List[str]
    data: Dict[str, Any]
    request: Optional[WebhookRequest] = None
    response: Optional[WebhookResponse] = None
    items: Dict[str, Any] = field(default_factory=dict)


class WebhookHandler(Protocol):
    # None handles notifications from every receiver
    receiver: Optional[str]
    order: int

    async def execute(self, receiver: str, context: WebhookHandlerContext) -> None:
        ...


class HandlerDispatcher:
    """Dispatcher running ordered WebhookHandlers."""

    def __init__(self, handlers: Sequence[WebhookHandler] = ()):
        self._handlers: List[WebhookHandler] = []
        for handler in handlers:
            self.add_handler(handler)

    def add_handler(self, handler: WebhookHandler) -> None:
        self._handlers.append(handler)
        # stable sort keeps registration order for equal priorities
        self._handlers.sort(key=lambda h: h.order)

    @property
    def handlers(self) -> List[WebhookHandler]:
        return list(self._handlers)

    def handlers_for(self, receiver: str) -> List[WebhookHandler]:
        name = receiver.lower()
        return [h for h in self._handlers if h.receiver is None or h.receiver.lower() == name]

    async def dispatch(
        self,
        receiver: str,
        webhook_id: str,
        request: WebhookRequest,
        actions: Sequence[str],
        payload: Dict[str, Any],
    ) -> WebhookResponse:
        context = WebhookHandlerContext(
            receiver=receiver,
            id=webhook_id,
            actions=list(actions),
            data=payload,
            request=request,
        )
        for handler in self.handlers_for(receiver):
            try:
                await handler.execute(receiver, context)
            except Exception:
                logger.error(
                    "WebHook handler failed",
                    handler=type(handler).__name__,
                    receiver=receiver,
                    webhook_id=webhook_id,
                    exc_info=True,
                )
                raise
            if context.response is not None:
                return context.response
        return WebhookResponse.ok({"ok": True})


class LoggingWebhookHandler:
    """Logs every accepted notification; never produces a response."""

    def __init__(self, receiver: Optional[str] = None, order: int = DEFAULT_ORDER):
        self.receiver = receiver
        self.order = order

    async def execute(self, receiver: str, context: WebhookHandlerContext) -> None:
        logger.info(
            "WebHook notification accepted",
            receiver=receiver,
            webhook_id=context.id,
            actions=context.actions,
            keys=sorted(context.data),
            object=context.data.get("object"),
        )
