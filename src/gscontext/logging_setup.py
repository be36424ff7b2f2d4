"""Structured logging configuration for the script context utilities."""

from __future__ import annotations

import logging
import logging.handlers
import re
from pathlib import Path
from typing import Any

import structlog
from structlog.stdlib import BoundLogger

_LOGGING_CONFIGURED = False

_SENSITIVE_KEYS = (
    "authorization",
    "api_key",
    "token",
    "password",
    "secret",
    "bearer",
    "auth",
    "credential",
    "access_token",
    "refresh_token",
)

# user:password@ in URLs and key=value query parameters
_URL_CREDENTIALS = re.compile(r"(?<=://)[^/@\s:]+:[^/@\s]+@")
_QUERY_SECRETS = re.compile(r"(?i)\b(token|api_key|apikey|password|secret|key)=([^&\s]+)")


class RedactSecretsFilter(logging.Filter):
    """Filter to redact sensitive information from log records."""

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self.sensitive_patterns = [
            (re.compile(r"(?i)(token|api_key|password|secret|key)\s*=\s*([^\s,}&]+)"), r"\1=[REDACTED]"),
            (re.compile(r"(?i)(authorization|bearer)\s*:\s*([^\s,}]+)"), r"\1: [REDACTED]"),
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern, replacement in self.sensitive_patterns:
            message = pattern.sub(replacement, message)
        record.msg = message
        record.args = None
        return True


def redact_url(url: str) -> str:
    """Strip embedded credentials and secret query parameters from a URL."""
    url = _URL_CREDENTIALS.sub("[REDACTED]@", url)
    return _QUERY_SECRETS.sub(r"\1=[REDACTED]", url)


def _redact_secrets_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Remove sensitive information from structlog event dictionary."""

    def redact_dict(d: dict[str, Any]) -> dict[str, Any]:
        result = {}
        for key, value in d.items():
            if isinstance(value, dict):
                result[key] = redact_dict(value)
            elif isinstance(value, str) and any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
                result[key] = "[REDACTED]"
            else:
                result[key] = value
        return result

    event_dict = redact_dict(event_dict)
    if isinstance(event_dict.get("url"), str):
        event_dict["url"] = redact_url(event_dict["url"])
    return event_dict


def configure_logging(
    level: str = "INFO",
    console_format: str = "text",
    log_file: Path | None = None,
    *,
    force: bool = False,
) -> BoundLogger:
    """Configure structlog on top of the standard logging module.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_format: Console format (text or json)
        log_file: Optional rotating log file
        force: Reconfigure even if logging was configured before

    Returns:
        Configured structlog logger
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED and not force:
        return structlog.get_logger()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.addFilter(RedactSecretsFilter())
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(RedactSecretsFilter())
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_secrets_processor,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if console_format == "json" else structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _LOGGING_CONFIGURED = True
    return structlog.get_logger()


def get_logger(name: str, **initial_values: Any) -> BoundLogger:
    """Return a structlog logger bound to ``name`` and any initial values."""
    return structlog.get_logger(name).bind(**initial_values)


__all__ = [
    "RedactSecretsFilter",
    "configure_logging",
    "get_logger",
    "redact_url",
]
