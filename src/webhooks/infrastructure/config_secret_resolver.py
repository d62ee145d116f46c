"""
Configuration-backed secret resolver.

Each receiver reads a secret table from settings
(``<RECEIVER>_WEBHOOK_SECRET``) in the form ``secret0, id1=secret1, id2=secret2``.
The unkeyed entry is the default secret (id ``""``); ids are case-insensitive.
"""
from __future__ import annotations

from typing import Dict, Optional

from src.config import Settings, get_settings
from src.shared.domain.result import Failure, Result, Success
from src.shared.exceptions import ConfigurationError
from src.shared.logging import get_logger
from src.webhooks.domain.exceptions import SecretResolutionError

logger = get_logger(__name__)

DEFAULT_ID = ""


def parse_secret_table(raw: str, receiver: str = "") -> Dict[str, str]:
    """
    Parse ``secret0, id1=secret1`` into ``{"": "secret0", "id1": "secret1"}``.

    Raises:
        ConfigurationError: an entry has more than one '=', an empty id or
            secret, or an id appears twice
    """
    table: Dict[str, str] = {}
    for entry in (raw or "").split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = [p.strip() for p in entry.split("=")]
        if len(parts) == 1:
            key, secret = DEFAULT_ID, parts[0]
        elif len(parts) == 2 and parts[0] and parts[1]:
            key, secret = parts[0].lower(), parts[1]
        else:
            # never echo the entry, it contains the secret
            raise ConfigurationError(
                f"Invalid secret entry for WebHook receiver '{receiver}': "
                "expected 'secret' or 'id=secret'"
            )
        if key in table:
            raise ConfigurationError(
                f"Duplicate secret entry for WebHook receiver '{receiver}' and id '{key}'"
            )
        table[key] = secret
    return table


class ConfigSecretResolver:
    """SecretResolver reading per-receiver secret tables from Settings."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._tables: Dict[str, Dict[str, str]] = {}

    def table_for(self, receiver: str) -> Dict[str, str]:
        key = receiver.lower()
        if key not in self._tables:
            self._tables[key] = parse_secret_table(self.settings.receiver_secret_table(key), key)
        return self._tables[key]

    async def resolve(
        self,
        receiver: str,
        webhook_id: str,
        min_length: int,
        max_length: int,
    ) -> Result[str, SecretResolutionError]:
        secret = self.table_for(receiver).get((webhook_id or DEFAULT_ID).lower())
        if secret is None:
            return Failure(SecretResolutionError(
                f"Could not find a valid configuration for WebHook receiver '{receiver}' "
                f"and instance '{webhook_id}'."
            ))
        if not min_length <= len(secret) <= max_length:
            logger.warning(
                "Configured WebHook secret has invalid length",
                receiver=receiver,
                webhook_id=webhook_id,
                min_length=min_length,
                max_length=max_length,
            )
            return Failure(SecretResolutionError(
                f"The WebHook secret for receiver '{receiver}' and instance '{webhook_id}' "
                f"must be between {min_length} and {max_length} characters long."
            ))
        return Success(secret)
