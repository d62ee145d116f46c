"""WebHook response value object."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class WebhookResponse:
    """Framework-neutral response produced by receivers and dispatchers."""
    status_code: int = 200
    content: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, content: Any = None) -> "WebhookResponse":
        return cls(status_code=200, content=content)
