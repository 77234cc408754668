"""
Shared logging utilities.

Message bodies (SMS texts, email snippets) routinely carry card numbers,
addresses and phone numbers, so everything that reaches a log line goes
through filter_pii first.
"""

import json
import logging
import re
import sys
from typing import Any

# Configure logging format
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Name of the stdout handler owned by setup_logging
CONSOLE_HANDLER_NAME = "expense_ingest.console"

ingest_logger = logging.getLogger("expense_ingest.ingest")


# PII patterns to filter from logs
PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[CARD]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    # Phone numbers in international format (SMS senders)
    (re.compile(r"\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,5}"), "[PHONE]"),
]


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


# Record attributes copied verbatim into the JSON payload when present
_EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "client_ip",
    "source",
)


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        # Parse-error context from log_parse_error
        context = getattr(record, "context", None)
        if context:
            log_data["context"] = {
                key: filter_pii(value) if isinstance(value, str) else value
                for key, value in context.items()
            }

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure root logger.

    Safe to call more than once: the console handler installed by an
    earlier call is reconfigured instead of being added again.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        json_format: Emit one JSON object per record instead of plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()

    console_handler = next(
        (h for h in root_logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME),
        None,
    )
    if console_handler is None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        root_logger.addHandler(console_handler)

    console_handler.setLevel(log_level)
    if json_format:
        console_handler.setFormatter(JSONLogFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(log_level)


def log_parse_error(source: str, message: str, **context: Any) -> None:
    """Record an ingestion-level parse failure (skipped message, bad row, ...).

    Args:
        source: Ingestion channel ('gmail', 'sms', 'csv', 'llm')
        message: Short description of what went wrong
        **context: Extra fields attached to the log record
    """
    ingest_logger.warning(
        f"[ParseError][{source}] {message}",
        extra={"source": source, "context": context},
    )
