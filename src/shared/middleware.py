# src/shared/middleware.py
from __future__ import annotations

import time
import uuid

from fastapi import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.config import get_settings
from src.shared.logging import bind_request_context, clear_request_context, get_logger, set_correlation_id

logger = get_logger("http")


class CorrelationIdMiddleware:
    """
    Ensures every request has a correlation id.
    - Reads from X-Correlation-ID if provided, otherwise generates one.
    - Exposes request.state.correlation_id for downstream usage.
    - Binds it to structlog contextvars for the lifetime of the request.
    - Echoes X-Correlation-ID in response headers.
    """
    def __init__(self, app: ASGIApp, header_name: str | None = None):
        self.app = app
        self.header_name = header_name or get_settings().CORRELATION_ID_HEADER

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        corr = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.correlation_id = corr
        set_correlation_id(corr)
        bind_request_context(
            path=scope.get("path"),
            method=scope.get("method"),
            client_ip=request.client.host if request.client else None,
        )

        async def send_wrapper(message: Message):
            if message.get("type") == "http.response.start":
                headers = list(message.get("headers") or [])
                headers.append((self.header_name.lower().encode("latin-1"), corr.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            clear_request_context()


class RequestLoggingMiddleware:
    """
    Lightweight request timing + structured logging.
    - Logs completion with method, path, status, duration_ms.
    """
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()

        async def send_wrapper(message: Message):
            if message.get("type") == "http.response.start":
                logger.info(
                    "HttpRequestCompleted",
                    method=scope.get("method"),
                    path=scope.get("path"),
                    status=message.get("status"),
                    duration_ms=int((time.perf_counter() - start) * 1000),
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
