"""Registry of WebHook receivers keyed by (case-insensitive) name."""
from typing import Dict, List, Optional

from src.webhooks.domain.protocols import WebhookReceiver


class ReceiverRegistry:
    def __init__(self, *receivers: WebhookReceiver):
        self._receivers: Dict[str, WebhookReceiver] = {}
        for receiver in receivers:
            self.register(receiver)

    def register(self, receiver: WebhookReceiver) -> None:
        key = receiver.name.lower()
        if key in self._receivers:
            raise ValueError(f"A WebHook receiver named '{receiver.name}' is already registered")
        self._receivers[key] = receiver

    def get(self, name: str) -> Optional[WebhookReceiver]:
        return self._receivers.get((name or "").lower())

    def names(self) -> List[str]:
        return sorted(self._receivers)
