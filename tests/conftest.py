from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from src.config import Settings
from src.main import create_app
from src.webhooks.domain.value_objects import WebhookResponse
from src.webhooks.infrastructure import ConfigSecretResolver

DEFAULT_SECRET = "mysecret12345678"
PAGE_SECRET = "page-one-secret-0123456789"
SHORT_SECRET = "tooshort"
SECRET_TABLE = f"{DEFAULT_SECRET}, page1={PAGE_SECRET}, short={SHORT_SECRET}"


class RecordingDispatcher:
    """Dispatcher double that records every forwarded notification."""

    def __init__(self, response: Optional[WebhookResponse] = None):
        self.calls: List[Dict[str, Any]] = []
        self.response = response or WebhookResponse.ok({"ok": True, "dispatched": True})

    async def dispatch(self, receiver, webhook_id, request, actions: Sequence[str], payload):
        self.calls.append(
            {"receiver": receiver, "id": webhook_id, "request": request, "actions": list(actions), "payload": payload}
        )
        return self.response


class SpyResolver:
    """Wraps a resolver and counts lookups."""

    def __init__(self, inner):
        self.inner = inner
        self.calls: List[tuple] = []

    async def resolve(self, receiver, webhook_id, min_length, max_length):
        self.calls.append((receiver, webhook_id, min_length, max_length))
        return await self.inner.resolve(receiver, webhook_id, min_length, max_length)


def body_reads(request: Request) -> int:
    return len(request.scope["test.body_reads"])


@pytest.fixture
def settings() -> Settings:
    return Settings(FACEBOOK_WEBHOOK_SECRET=SECRET_TABLE, ENV="test", LOG_FORMAT="console")


@pytest.fixture
def resolver(settings) -> SpyResolver:
    return SpyResolver(ConfigSecretResolver(settings))


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def app(settings, resolver, dispatcher):
    return create_app(settings, secret_resolver=resolver, dispatcher=dispatcher)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_request():
    """Build a real Starlette Request; body reads are recorded in the scope."""

    def _make(
        method: str = "GET",
        *,
        query: Optional[Dict[str, str]] = None,
        headers: Optional[List[tuple]] = None,
        body: bytes = b"",
    ) -> Request:
        scope = {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "path": "/api/webhooks/incoming/facebook",
            "raw_path": b"/api/webhooks/incoming/facebook",
            "query_string": urlencode(query or {}).encode("latin-1"),
            "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or [])],
            "client": ("testclient", 50000),
            "server": ("testserver", 80),
            "test.body_reads": [],
        }

        async def receive():
            scope["test.body_reads"].append(1)
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make
