"""
Hub Signature Value Object
Parses and checks the ``X-Hub-Signature`` header (``sha1=<hex digest>``).
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass, field

from src.shared.domain.result import Failure, Result, Success
from src.webhooks.domain.exceptions import BadEncodingError, MalformedHeaderError, WebhookError
from src.webhooks.domain.services.signing import SIGNATURE_ALGORITHM, decode_hex, encode_hex

SIGNATURE_HEADER_NAME = "X-Hub-Signature"


@dataclass(frozen=True)
class HubSignature:
    """
    Value object for a parsed signature header.

    Attributes:
        algorithm: Algorithm token as sent by the caller (e.g. "sha1")
        digest: Decoded digest bytes
    """
    algorithm: str
    digest: bytes = field(repr=False)

    @classmethod
    def parse(
        cls,
        header_value: str,
        expected_algorithm: str = SIGNATURE_ALGORITHM,
    ) -> Result["HubSignature", WebhookError]:
        """
        Parse ``<algorithm>=<hex>``.

        Returns:
            Success(HubSignature), Failure(MalformedHeaderError) when the value is
            not exactly two non-empty parts with the expected algorithm, or
            Failure(BadEncodingError) when the digest is not valid hex
        """
        parts = [p.strip() for p in header_value.split("=")]
        parts = [p for p in parts if p]
        if len(parts) != 2 or parts[0].lower() != expected_algorithm.lower():
            return Failure(MalformedHeaderError(
                f"Invalid '{SIGNATURE_HEADER_NAME}' header value. "
                f"Expecting a value of '{expected_algorithm}=<value>'."
            ))

        try:
            digest = decode_hex(parts[1])
        except ValueError as e:
            return Failure(BadEncodingError(
                f"The '{SIGNATURE_HEADER_NAME}' header value is invalid. "
                "It must be a valid hex-encoded string.",
                cause=e,
            ))
        return Success(cls(algorithm=parts[0], digest=digest))

    @property
    def hex_digest(self) -> str:
        return encode_hex(self.digest)

    def matches(self, computed_hex: str) -> bool:
        """Constant-time, case-insensitive comparison against a computed hex digest."""
        return hmac.compare_digest(self.hex_digest, computed_hex.lower())
