"""
Inbound Request Protocol
The subset of an HTTP request a receiver reads. Starlette's Request satisfies it.
"""
from typing import List, Mapping, Optional, Protocol


class HeaderView(Protocol):
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    def getlist(self, key: str) -> List[str]:
        ...


class WebhookRequest(Protocol):
    """Request view consumed by WebHook receivers."""

    @property
    def method(self) -> str:
        ...

    @property
    def query_params(self) -> Mapping[str, str]:
        ...

    @property
    def headers(self) -> HeaderView:
        ...

    async def body(self) -> bytes:
        """Raw entity body; read only when a receiver needs it."""
        ...
