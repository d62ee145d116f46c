# src/webhooks/domain/exceptions.py
"""
WebHook Domain Errors

Returned inside ``Failure`` by receivers and translated to an HTTP response
once, at the API boundary.
"""
from typing import Any, Dict, Optional

from fastapi import status

from src.shared.exceptions import DomainError, NotFoundError


class WebhookError(DomainError):
    """Base error for rejected WebHook requests."""
    code = "webhook_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidArgumentError(WebhookError):
    code = "invalid_argument"


class SecretResolutionError(WebhookError):
    """No usable secret is configured for the receiver/id pair."""
    code = "secret_unresolved"


class MalformedHeaderError(WebhookError):
    code = "malformed_header"


class MissingHeaderError(MalformedHeaderError):
    code = "header_missing"


class BadEncodingError(WebhookError):
    code = "bad_encoding"

    def __init__(self, message: str = "", *, cause: Optional[Exception] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        # kept for logs only, never rendered
        self.cause = cause


class SignatureMismatchError(WebhookError):
    code = "signature_mismatch"


class InvalidVerifyTokenError(WebhookError):
    code = "bad_verify_token"


class InvalidChallengeError(WebhookError):
    code = "invalid_challenge"


class InvalidPayloadError(WebhookError):
    code = "invalid_payload"


class UnsupportedMethodError(WebhookError):
    code = "method_not_allowed"
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED

    def __init__(self, method: str, allowed: tuple = ("GET", "POST"), **kwargs: Any) -> None:
        self.method = method
        self.allowed = tuple(allowed)
        super().__init__(
            f"The HTTP '{method}' method is not supported by this WebHook receiver.",
            **kwargs,
        )

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"Allow": ", ".join(self.allowed)}


class ReceiverNotFoundError(NotFoundError):
    code = "receiver_not_found"
