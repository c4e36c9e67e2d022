"""
Structured logging configuration using structlog.

Provides consistent, structured logging across all modules.
Security events carry the offending paths, so log output is passed
through a privacy redactor before rendering.
"""

import logging
import re
import sys
from typing import Any

import structlog

from docguard.shared.infrastructure.config import settings

_REDACTION_PATTERNS = {
    r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b": "[EMAIL_REDACTED]",
    r"/Users/[^/\s]+": "[HOME_REDACTED]",
    r"/home/[^/\s]+": "[HOME_REDACTED]",
    r"(api[_-]?key|token|password|secret)['\"]?\s*[:=]\s*['\"]?([^'\"\s]+)": r"\1=[REDACTED]",
    r"Bearer\s+\S+": "Bearer [TOKEN_REDACTED]",
}


def redact_string(text: str) -> str:
    """Redact sensitive patterns from a string."""
    for pattern, replacement in _REDACTION_PATTERNS.items():
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
    return text


def privacy_redactor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Redact sensitive information from logs.

    Redacts:
    - Email addresses
    - File paths containing home directories
    - API keys, passwords, tokens

    Only log output is redacted; exception messages raised to callers
    keep the full path.
    """
    if not getattr(settings, "log_redaction_enabled", True):
        return event_dict

    def redact(value: Any) -> Any:
        if isinstance(value, str):
            return redact_string(value)
        if isinstance(value, dict):
            return {k: redact(v) for k, v in value.items()}
        if isinstance(value, list):
            return [redact(i) for i in value]
        return value

    return {k: redact(v) for k, v in event_dict.items()}


def configure_logging(stream: Any = sys.stderr) -> None:
    """
    Configure structlog for the application.

    Sets up:
    - Pretty console output for development
    - JSON output for production
    - Log level from settings
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        privacy_redactor,
    ]

    if settings.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        force=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("path_escape_blocked", path="../../etc/passwd")
    """
    return structlog.get_logger(name)
