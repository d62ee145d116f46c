# src/config.py

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central application settings (Pydantic v2).

    - Aliases match the .env keys:
      APP_NAME, ENV, LOG_LEVEL, LOG_FORMAT,
      FACEBOOK_WEBHOOK_SECRET (or MS_WebHookReceiverSecret_Facebook)
    - Receiver secrets use the table format
      'secret0, id1=secret1, id2=secret2' where the unkeyed entry is the default.
    """

    # ------------------------------------------------------------------------------------
    # App / API
    # ------------------------------------------------------------------------------------
    PROJECT_NAME: str = Field(default="hubhooks", alias="APP_NAME")
    ENVIRONMENT: str = Field(default="dev", alias="ENV")  # dev|staging|prod
    PROJECT_VERSION: str = Field(default="1.0.0")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Optional[str] = Field(default=None)  # json|console; derived from ENV when unset

    # ------------------------------------------------------------------------------------
    # Webhook receivers
    # ------------------------------------------------------------------------------------
    WEBHOOK_ROUTE_PREFIX: str = Field(default="/api/webhooks/incoming")
    FACEBOOK_WEBHOOK_SECRET: str = Field(
        default="",
        validation_alias=AliasChoices("FACEBOOK_WEBHOOK_SECRET", "MS_WebHookReceiverSecret_Facebook"),
        description="Secret table, e.g. 'secret0, id1=secret1' (never commit real secrets)",
    )

    # ------------------------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------------------------
    CORRELATION_ID_HEADER: str = Field(default="X-Correlation-ID")

    # ------------------------------------------------------------------------------------
    # Helper properties
    # ------------------------------------------------------------------------------------
    @property
    def is_dev(self) -> bool:
        return self.ENVIRONMENT.lower() in {"dev", "development", "local"}

    @property
    def is_staging(self) -> bool:
        return self.ENVIRONMENT.lower() in {"stage", "staging"}

    @property
    def is_prod(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    def receiver_secret_table(self, receiver: str) -> str:
        """Raw secret table configured for a receiver name ('' when unset)."""
        return getattr(self, f"{receiver.upper()}_WEBHOOK_SECRET", "") or ""

    # ------------------------------------------------------------------------------------
    # Pydantic v2 settings config
    # ------------------------------------------------------------------------------------
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "populate_by_name": True,   # enable aliases
        "extra": "ignore",          # don't crash on unrelated env keys
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()


# Convenient singleton: from src.config import settings
settings = get_settings()
