"""Structured logging with secret redaction and catalog context."""

import json
import logging
import re
from typing import Any, Dict, Optional

LOGGER_NAME = "table_catalog"


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter for structured logging with secret redaction."""

    def __init__(self, redact_secrets: bool = False):
        super().__init__()
        self.redact_secrets = redact_secrets
        # Credential material that can show up in botocore error messages
        self.secret_patterns = [
            re.compile(
                r'(aws_secret_access_key|aws_session_token|secret|token|password)'
                r'(["\']?\s*[:=]\s*["\']?)([^"\'\s,}]+)',
                re.IGNORECASE,
            ),
            re.compile(r"\b(AKIA|ASIA)[A-Z0-9]{16}\b"),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with optional secret redaction."""
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Catalog context arrives through extra={"extra_data": {...}}
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_str = json.dumps(log_data, default=str)
        if self.redact_secrets:
            log_str = self.redact(log_str)
        return log_str

    def redact(self, text: str) -> str:
        """Replace credential-looking values in ``text`` with ``[REDACTED]``."""
        key_value, access_key = self.secret_patterns
        text = key_value.sub(r"\1\2[REDACTED]", text)
        return access_key.sub("[REDACTED]", text)


def setup_logging(
    level: str = "INFO",
    redact_secrets: bool = False,
) -> logging.Logger:
    """Set up structured JSON logging for the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        redact_secrets: Whether to redact secrets in logs

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJSONFormatter(redact_secrets=redact_secrets))
    logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Optional logger name (defaults to 'table_catalog')

    Returns:
        Logger instance
    """
    return logging.getLogger(name or LOGGER_NAME)
