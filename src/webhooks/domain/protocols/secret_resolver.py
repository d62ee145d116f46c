"""
Secret Resolver Protocol
Maps a (receiver, id) pair to the shared secret used to authenticate requests.
"""
from typing import Protocol

from src.shared.domain.result import Result
from src.webhooks.domain.exceptions import SecretResolutionError


class SecretResolver(Protocol):
    """Resolves shared secrets for WebHook receivers."""

    async def resolve(
        self,
        receiver: str,
        webhook_id: str,
        min_length: int,
        max_length: int,
    ) -> Result[str, SecretResolutionError]:
        """
        Look up the secret for ``webhook_id`` ('' selects the default secret).

        Implementations enforce ``min_length <= len(secret) <= max_length``
        and return Failure instead of raising.
        """
        ...
