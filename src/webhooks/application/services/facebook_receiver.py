"""
Facebook WebHook Receiver

Supports WebHooks generated by Facebook. Secrets come from the
``FACEBOOK_WEBHOOK_SECRET`` setting, optionally keyed by id to differentiate
between multiple WebHooks, e.g. ``secret0, id1=secret1, id2=secret2``.
The corresponding URI is ``/api/webhooks/incoming/facebook/{id}``.
"""
from __future__ import annotations

import hmac
import json
import re
from typing import Any, Dict, Optional

import structlog
from fastapi import status

from src.shared.domain.result import Failure, Success
from src.shared.logging import get_logger, log_security_event
from src.webhooks.domain.exceptions import (
    InvalidArgumentError,
    InvalidChallengeError,
    InvalidPayloadError,
    InvalidVerifyTokenError,
    MissingHeaderError,
    SignatureMismatchError,
    UnsupportedMethodError,
    WebhookError,
)
from src.webhooks.domain.protocols import Dispatcher, ReceiveResult, SecretResolver, WebhookRequest
from src.webhooks.domain.services.signing import SIGNATURE_ALGORITHM, compute_signature
from src.webhooks.domain.value_objects import SIGNATURE_HEADER_NAME, HubSignature, WebhookResponse

_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1
_CHALLENGE_RE = re.compile(r"\A\s*[+-]?[0-9]+\s*\Z")


class FacebookWebhookReceiver:
    """
    Receiver for Facebook-style hub callbacks.

    GET requests answer the subscription handshake, POST requests are
    authenticated with ``X-Hub-Signature`` and forwarded to the dispatcher.
    Every rejection is returned as ``Failure``; nothing is raised to the caller.
    """

    RECEIVER_NAME = "facebook"
    SECRET_MIN_LENGTH = 16
    SECRET_MAX_LENGTH = 128
    ALLOWED_METHODS = ("GET", "POST")

    def __init__(
        self,
        secret_resolver: SecretResolver,
        dispatcher: Dispatcher,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ):
        self.secret_resolver = secret_resolver
        self.dispatcher = dispatcher
        self.logger = logger or get_logger(__name__)

    @property
    def name(self) -> str:
        return self.RECEIVER_NAME

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    async def receive(self, webhook_id: Optional[str], request: WebhookRequest) -> ReceiveResult:
        if webhook_id is None:
            return Failure(InvalidArgumentError("The WebHook id must not be null."))

        method = request.method.upper()
        if method == "POST":
            return await self.verify_and_forward(webhook_id, request)
        if method == "GET":
            return await self.handle_challenge(webhook_id, request)
        return Failure(UnsupportedMethodError(method, allowed=self.ALLOWED_METHODS))

    # ------------------------------------------------------------------
    # GET: subscription handshake
    # ------------------------------------------------------------------
    async def handle_challenge(self, webhook_id: str, request: WebhookRequest) -> ReceiveResult:
        resolved = await self._resolve_secret(webhook_id)
        if resolved.is_failure():
            return resolved
        secret: str = resolved.value

        qp = request.query_params
        hub_mode = qp.get("hub.mode")
        hub_verify_token = qp.get("hub.verify_token")

        if hub_mode == "subscribe" and _token_equals(hub_verify_token, secret):
            challenge = _parse_challenge(qp.get("hub.challenge"))
            if challenge.is_failure():
                return self._reject(webhook_id, challenge.error)
            return Success(WebhookResponse(status_code=status.HTTP_200_OK, content=challenge.value))

        return self._reject(webhook_id, InvalidVerifyTokenError(), hub_mode=hub_mode)

    # ------------------------------------------------------------------
    # POST: signed notification
    # ------------------------------------------------------------------
    async def verify_and_forward(self, webhook_id: str, request: WebhookRequest) -> ReceiveResult:
        verified = await self.verify_signature(webhook_id, request)
        if verified.is_failure():
            return verified

        data = _parse_json_object(verified.value)
        if data.is_failure():
            return self._reject(webhook_id, data.error)

        # Facebook carries no action hints in headers
        actions: list = []
        response = await self.dispatcher.dispatch(self.name, webhook_id, request, actions, data.value)
        return Success(response)

    async def verify_signature(self, webhook_id: str, request: WebhookRequest):
        """
        Check that the signature header matches the actual body.

        Returns:
            Success(body_text) when authentic, otherwise Failure(WebhookError)
        """
        resolved = await self._resolve_secret(webhook_id)
        if resolved.is_failure():
            return resolved
        secret: str = resolved.value

        values = request.headers.getlist(SIGNATURE_HEADER_NAME)
        if len(values) != 1:
            return self._reject(webhook_id, MissingHeaderError(
                f"Expecting exactly one '{SIGNATURE_HEADER_NAME}' header field in the WebHook request "
                f"but found {len(values)}."
            ))

        parsed = HubSignature.parse(values[0], expected_algorithm=SIGNATURE_ALGORITHM)
        if parsed.is_failure():
            return self._reject(webhook_id, parsed.error)
        signature: HubSignature = parsed.value

        raw = await request.body()
        body_text = raw.decode("utf-8", errors="replace")
        computed = compute_signature(secret, body_text)
        if not signature.matches(computed):
            return self._reject(webhook_id, SignatureMismatchError(
                f"The WebHook signature provided by the '{SIGNATURE_HEADER_NAME}' header field "
                "does not match the value expected by the receiver. WebHook request is invalid."
            ))
        return Success(body_text)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _resolve_secret(self, webhook_id: str):
        resolved = await self.secret_resolver.resolve(
            self.name, webhook_id, self.SECRET_MIN_LENGTH, self.SECRET_MAX_LENGTH
        )
        if resolved.is_failure():
            return self._reject(webhook_id, resolved.error)
        return resolved

    def _reject(self, webhook_id: str, error: WebhookError, **context: Any) -> Failure:
        log_context: Dict[str, Any] = dict(context)
        cause = getattr(error, "cause", None)
        if cause is not None:
            log_context["cause"] = repr(cause)
        self.logger.error(error.message, receiver=self.name, webhook_id=webhook_id, code=error.code, **log_context)
        log_security_event(f"webhook.{error.code}", receiver=self.name, webhook_id=webhook_id)
        return Failure(error)


def _token_equals(candidate: Optional[str], secret: str) -> bool:
    if candidate is None:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def _parse_challenge(raw: Optional[str]):
    if raw is None or not _CHALLENGE_RE.match(raw):
        return Failure(InvalidChallengeError())
    value = int(raw.strip())
    if not _INT64_MIN <= value <= _INT64_MAX:
        return Failure(InvalidChallengeError("The 'hub.challenge' query parameter is out of range."))
    return Success(value)


def _parse_json_object(body_text: str):
    try:
        data = json.loads(body_text)
    except (ValueError, RecursionError):
        return Failure(InvalidPayloadError())
    if not isinstance(data, dict):
        return Failure(InvalidPayloadError())
    return Success(data)
