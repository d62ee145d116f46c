"""
Structured logging using structlog with:
- JSON/console switchable format
- Correlation ID + request context
- Redaction of credential-like fields (secrets, verify tokens, signatures)
- Safe defaults for Uvicorn
- Security event helper used by the webhook receivers

"""

from __future__ import annotations

import datetime
import logging
import logging.config
import sys
import uuid
from typing import Any, Dict, Iterable, Optional

import structlog

from src.config import Settings, get_settings

# ---------------------------------------------------------------------
# Redaction
# ---------------------------------------------------------------------


class SecretRedactionProcessor:
    """
    Structlog processor masking values of credential-like keys inside event_dict (recursively).
    Only the key name survives; the value is replaced with a fixed marker.
    """
    SENSITIVE_KEYS = frozenset({
        "secret",
        "app_secret",
        "verify_token",
        "hub.verify_token",
        "signature",
        "x-hub-signature",
        "authorization",
    })
    MASK = "***REDACTED***"

    def __call__(self, logger, method_name, event_dict):
        return self._redact(event_dict)

    def _redact(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: (self.MASK if isinstance(k, str) and k.lower() in self.SENSITIVE_KEYS else self._redact(v))
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._redact(v) for v in value]
        return value


# ---------------------------------------------------------------------
# Context processors
# ---------------------------------------------------------------------


class CorrelationIdProcessor:
    """Attach correlation_id from structlog contextvars into each event."""
    def __call__(self, logger, method_name, event_dict):
        ctx = structlog.contextvars.get_contextvars()
        cid = ctx.get("correlation_id")
        if cid:
            event_dict["correlation_id"] = cid
        return event_dict


def add_timestamp(logger, method_name, event_dict):
    # UTC ISO8601 Z
    event_dict["timestamp"] = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return event_dict


def _passthrough(logger, method_name, event_dict):
    return event_dict


# ---------------------------------------------------------------------
# Public helpers to use from API code
# ---------------------------------------------------------------------


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Generate/bind a correlation_id if not provided; returns the id."""
    cid = correlation_id or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(correlation_id=cid)
    return cid


def bind_request_context(
    *,
    path: Optional[str] = None,
    method: Optional[str] = None,
    receiver: Optional[str] = None,
    webhook_id: Optional[str] = None,
    client_ip: Optional[str] = None,
) -> None:
    """Bind standard request context fields (call in middleware/route handlers)."""
    payload = {
        k: v
        for k, v in dict(
            path=path,
            method=method,
            receiver=receiver,
            webhook_id=webhook_id,
            client_ip=client_ip,
        ).items()
        if v is not None
    }
    if payload:
        structlog.contextvars.bind_contextvars(**payload)


def clear_request_context() -> None:
    """Clear all bound contextvars (call at end of request)."""
    structlog.contextvars.clear_contextvars()


# ---------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------

def _ensure_log_format(settings) -> str:
    """
    Determine output format:
      - If settings has LOG_FORMAT, use it ("json"|"console").
      - Else default: "console" for dev, "json" for staging/prod.
    """
    fmt = (getattr(settings, "LOG_FORMAT", None) or "").lower()
    if fmt in ("json", "console"):
        return fmt
    return "console" if getattr(settings, "is_dev", False) else "json"


def _level_name_to_int(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Idempotent structured logging configuration."""
    settings = settings or get_settings()
    log_format = _ensure_log_format(settings)
    is_prod_like = settings.is_prod or settings.is_staging

    # Python stdlib logging config
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
            "console": {
                "format": "%(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if log_format == "json" else "console",
                "stream": sys.stdout,
            },
        },
        "root": {
            "level": _level_name_to_int(settings.LOG_LEVEL),
            "handlers": ["console"],
        },
        "loggers": {
            # Quiet noisy libs, but keep errors
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }
    logging.config.dictConfig(logging_config)

    # structlog processors pipeline
    processors: Iterable[Any] = [
        structlog.contextvars.merge_contextvars,
        add_timestamp,
        CorrelationIdProcessor(),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        # Redaction stays off in dev so payload debugging is possible locally
        (SecretRedactionProcessor() if is_prod_like else _passthrough),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        # Renderer
        (structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # Clear any inherited context
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


# Named logger for security-relevant events
security_logger = structlog.get_logger("security")


def log_security_event(
    event_type: str,
    *,
    receiver: Optional[str] = None,
    webhook_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> None:
    """Log security-relevant events (rejected handshakes, signature failures, etc.)."""
    security_logger.error(
        "Security event",
        event_type=event_type,
        receiver=receiver,
        webhook_id=webhook_id,
        details=details or {},
        **kwargs,
    )
